from sailbrowser.tab import Tab


def test_default_tab():
    tab = Tab()
    assert tab.tab_id == 0
    assert tab.url == ""
    assert tab.desktop_mode is False
    assert tab.is_valid() is False


def test_positive_id_is_valid():
    assert Tab(1, "http://example.com", "Example", "").is_valid() is True


def test_equality_ignores_desktop_mode():
    first = Tab(3, "http://example.com", "Example", "/thumb.jpg")
    second = Tab(3, "http://example.com", "Example", "/thumb.jpg", desktop_mode=True)
    assert first == second


def test_equality_compares_other_fields():
    base = Tab(3, "http://example.com", "Example", "/thumb.jpg")
    assert base != Tab(4, "http://example.com", "Example", "/thumb.jpg")
    assert base != Tab(3, "http://example.com", "Other", "/thumb.jpg")
    assert base != Tab(3, "http://example.com", "Example", "/other.jpg")


def test_setting_id_makes_valid():
    tab = Tab()
    tab.tab_id = 9
    assert tab.is_valid() is True