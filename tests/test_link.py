import datetime

from sailbrowser.link import Link


def test_default_link_is_invalid():
    link = Link()
    assert link.link_id == 0
    assert link.url == ""
    assert link.date is None
    assert link.is_valid() is False


def test_link_with_id_and_url_is_valid():
    assert Link(1, "http://example.com", "", "Example").is_valid() is True


def test_link_without_url_is_invalid():
    assert Link(5, "", "/tmp/thumb.jpg", "Title").is_valid() is False


def test_link_with_non_positive_id_is_invalid():
    assert Link(-1, "http://example.com", "", "").is_valid() is False


def test_equality_compares_all_fields():
    day = datetime.date(2021, 3, 4)
    first = Link(2, "http://example.com", "thumb", "Title", day)
    second = Link(2, "http://example.com", "thumb", "Title", day)
    assert first == second
    assert first != Link(2, "http://example.com", "thumb", "Title")
    assert first != Link(2, "http://example.com", "other", "Title", day)


def test_fields_are_mutable():
    link = Link()
    link.link_id = 7
    link.url = "http://example.com"
    assert link.is_valid() is True