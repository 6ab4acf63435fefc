from validate_jekyll import main, render_summary


def test_main_passes_on_good_site(good_site, capsys):
    assert main(["--root", str(good_site.repo)]) == 0
    out = capsys.readouterr().out
    assert "[ERR]" not in out
    assert "[validate] done; errors=0" in out


def test_main_reports_failures(good_site, capsys):
    good_site.post("2021-05-01-no-author.md", "title: x")
    assert main(["--root", str(good_site.repo), "--rule", "author", "--rule", "post-slugs"]) == 1
    out = capsys.readouterr().out
    assert '[ERR] author: "jekyll/_posts/2021-05-01-no-author.md" author should be set' in out
    assert "[ERR] post-slugs: " in out
    assert "errors=2" in out


def test_main_unknown_rule_exits_with_usage_error(good_site, capsys):
    try:
        main(["--root", str(good_site.repo), "--rule", "nope"])
    except SystemExit as e:
        assert e.code == 2
    else:
        raise AssertionError("expected SystemExit")
    assert "unknown rule(s): nope" in capsys.readouterr().err


def test_list_rules(capsys):
    assert main(["--list"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0].startswith("image-size")
    assert len(out.splitlines()) == 16


def test_summary_file(good_site, tmp_path, capsys):
    summary = tmp_path / "summary.md"
    summary.write_text("# earlier step\n", encoding="utf-8")
    good_site.write("2021-01-01-misplaced-post-file.md", "x")
    assert main(["--root", str(good_site.repo), "--summary", str(summary)]) == 1
    text = summary.read_text("utf-8")
    assert text.startswith("# earlier step\n## Jekyll content lint")
    assert "**1** problem(s)" in text
    assert "### misplaced-files" in text
    assert "- should no miss placed files. jekyll/2021-01-01-misplaced-post-file.md" in text


def test_render_summary_all_green():
    text = render_summary({"tags": [], "author": []}, "/site/jekyll")
    assert "all rules passed" in text
    assert "| front matter key `tags` must contain at least one tag and not black listed | ok |" in text
    assert "###" not in text


def test_main_reports_non_utf8_post(good_site, capsys):
    good_site.raw("_posts/2021-01-20-latin-one-post.md", b"---\ntitle: caf\xe9\n---\n")
    assert main(["--root", str(good_site.repo)]) == 1
    out = capsys.readouterr().out
    assert "[ERR] local-images: " in out
    assert "[ERR] iframe-includes: " in out
    assert "[validate] done; errors=" in out
