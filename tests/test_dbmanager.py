import pytest

from sailbrowser.dbmanager import DBManager
from sailbrowser.tab import Tab


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "sailfish-browser.sqlite"


@pytest.fixture
def manager(db_path):
    m = DBManager(db_path)
    yield m
    m.close()


def test_setting_round_trip_and_signal(manager):
    changes = []
    manager.settings_changed.connect(lambda: changes.append(True))
    manager.save_setting("home", "http://example.com")
    assert manager.get_setting("home") == "http://example.com"
    assert len(changes) == 1


def test_missing_setting_is_empty(manager):
    assert manager.get_setting("nothing") == ""


def test_settings_persist_across_reopen(db_path):
    with DBManager(db_path) as first:
        first.save_setting("search", "engine")
    with DBManager(db_path) as second:
        assert second.get_setting("search") == "engine"


def test_delete_setting(db_path):
    with DBManager(db_path) as m:
        m.save_setting("a", "1")
        changes = []
        m.settings_changed.connect(lambda: changes.append(True))
        m.delete_setting("a")
        m.delete_setting("missing")
        assert m.get_setting("a") == ""
        assert len(changes) == 1
    with DBManager(db_path) as again:
        assert again.settings == {}


def test_tabs_available_after_create(manager):
    received = []
    manager.tabs_available.connect(received.append)
    manager.create_tab(Tab(1, "http://example.com", "Example", ""))
    tabs = manager.get_all_tabs().result()
    manager.wait()
    assert tabs == [Tab(1, "http://example.com", "Example", "")]
    assert received == [tabs]


def test_max_tab_id_and_remove_all(manager):
    manager.create_tab(Tab(3, "http://example.com/a", "A", ""))
    manager.create_tab(Tab(7, "http://example.com/b", "B", ""))
    assert manager.get_max_tab_id() == 7
    manager.remove_all_tabs()
    assert manager.get_max_tab_id() == 0


def test_navigation_and_back_forward(manager):
    manager.create_tab(Tab(1, "http://example.com/a", "A", ""))
    manager.navigate_to(1, "http://example.com/b")
    links, current = manager.get_tab_history(1).result()
    assert [link.url for link in links] == ["http://example.com/b", "http://example.com/a"]
    assert current == links[0].link_id

    manager.go_back(1)
    links, current = manager.get_tab_history(1).result()
    assert current == links[1].link_id

    manager.go_forward(1)
    links, current = manager.get_tab_history(1).result()
    assert current == links[0].link_id


def test_tab_history_signal(manager):
    received = []
    manager.tab_history_available.connect(lambda *args: received.append(args))
    manager.create_tab(Tab(2, "http://example.com", "E", ""))
    links, current = manager.get_tab_history(2).result()
    manager.wait()
    assert received == [(2, links, current)]


def test_history_entries(manager):
    manager.add_history_entry("http://example.com", "Example")
    manager.add_history_entry("about:blank", "Blank")
    links = manager.get_history().result()
    assert [(link.url, link.title) for link in links] == [("http://example.com", "Example")]


def test_remove_history_entry_by_url(manager):
    manager.add_history_entry("http://example.com", "Example")
    manager.remove_history_entry_by_url("http://example.com")
    assert manager.get_history("").result() == []


def test_clear_history_emits_empty(manager):
    received = []
    manager.history_available.connect(received.append)
    manager.add_history_entry("http://example.com", "Example")
    manager.create_tab(Tab(1, "http://example.com", "Example", ""))
    manager.clear_history()
    manager.wait()
    assert received == [[]]
    assert manager.get_max_tab_id() == 0


def test_title_changed_signal(manager):
    received = []
    manager.title_changed.connect(lambda *args: received.append(args))
    manager.create_tab(Tab(1, "http://example.com", "Old", ""))
    manager.update_title(1, "http://example.com", "New")
    manager.wait()
    assert received == [("http://example.com", "New")]
    tabs = manager.get_all_tabs().result()
    assert tabs[0].title == "New"


def test_thumb_path_signal(manager):
    received = []
    manager.thumb_path_changed.connect(lambda *args: received.append(args))
    manager.create_tab(Tab(4, "http://example.com", "E", ""))
    manager.update_thumb_path(4, "/tmp/thumb.jpg")
    tabs = manager.get_all_tabs().result()
    assert received == [(4, "/tmp/thumb.jpg")]
    assert tabs[0].thumbnail_path == "/tmp/thumb.jpg"


def test_instance_is_shared_and_reset_on_close(db_path):
    first = DBManager.instance(db_path)
    try:
        assert DBManager.instance() is first
    finally:
        first.close()
    second = DBManager.instance(db_path)
    try:
        assert second is not first
    finally:
        second.close()
    assert DBManager._instance is None


def test_closed_manager_raises(db_path):
    m = DBManager(db_path)
    m.close()
    with pytest.raises(RuntimeError):
        m.get_max_tab_id()