from utils import is_url, safe_filename, split_slugs, suggest_filename


def test_safe_filename():
    assert safe_filename("  Hello World!!.md ") == "hello-world-.md"
    assert safe_filename("--a__b--") == "a__b"
    assert safe_filename(None) == ""


def test_suggest_filename_keeps_date_prefix_and_suffix():
    assert suggest_filename("jekyll/_posts/2021-03-04-My Great Post.md") == "2021-03-04-my-great-post.md"
    assert suggest_filename("assets/Teaser Image.PNG") == "teaser-image.png"
    assert suggest_filename("assets/README") == "readme"


def test_split_slugs():
    assert split_slugs("2021-01-02-one-two-three.md") == ["one", "two", "three"]
    assert split_slugs("2021-01-02-solo.md") == ["solo"]
    assert split_slugs("no-date.md") == ["no", "date"]


def test_is_url():
    assert is_url("https://example.com/a.png")
    assert is_url("HTTP://example.com/a.png")
    assert not is_url("/assets/a.png")
    assert not is_url("")
