import os

import pytest

from sailbrowser.opensearch import (
    OpenSearchConfigs,
    default_configs,
    user_opensearch_path,
)


def _description(name):
    return (
        '<?xml version="1.0"?>'
        '<OpenSearchDescription xmlns="urn:example:opensearch">'
        f"<ShortName>{name}</ShortName>"
        "<Description>Search</Description>"
        "</OpenSearchDescription>"
    )


@pytest.fixture
def engines(tmp_path):
    builtin = tmp_path / "builtin"
    builtin.mkdir()
    (builtin / "alpha.xml").write_text(_description("Alpha"))
    (builtin / "beta.xml").write_text(_description("Beta"))
    (builtin / "broken.xml").write_text("<OpenSearchDescription><ShortName>Bad")
    (builtin / "notes.txt").write_text(_description("Ignored"))
    user = tmp_path / "user"
    user.mkdir()
    (user / "mine.xml").write_text(_description("Beta"))
    return builtin, user


def test_user_opensearch_path():
    assert user_opensearch_path("/home/user") == (
        "/home/user/.local/share/org.sailfishos/browser/searchEngines/"
    )


def test_available_configs_maps_names_to_files(engines):
    builtin, _ = engines
    configs = OpenSearchConfigs([builtin]).available_configs()
    assert configs == {
        "Alpha": os.path.join(str(builtin), "alpha.xml"),
        "Beta": os.path.join(str(builtin), "beta.xml"),
    }


def test_later_directory_overrides(engines):
    builtin, user = engines
    configs = OpenSearchConfigs([builtin, user]).available_configs()
    assert configs["Beta"] == os.path.join(str(user), "mine.xml")
    assert configs["Alpha"] == os.path.join(str(builtin), "alpha.xml")


def test_search_engine_list_sorted(engines):
    builtin, user = engines
    names = OpenSearchConfigs([user, builtin]).search_engine_list()
    assert names == sorted(names)
    assert set(names) == {"Alpha", "Beta"}


def test_missing_directory_is_ignored(tmp_path, engines):
    builtin, _ = engines
    configs = OpenSearchConfigs([tmp_path / "absent", builtin]).available_configs()
    assert set(configs) == {"Alpha", "Beta"}


def test_file_without_short_name_uses_empty_name(tmp_path):
    (tmp_path / "plain.xml").write_text("<OpenSearchDescription/>")
    configs = OpenSearchConfigs([tmp_path]).available_configs()
    assert configs == {"": os.path.join(str(tmp_path), "plain.xml")}


def test_default_configs_is_shared():
    first = default_configs()
    assert first is default_configs()
    assert first.search_paths[-1].endswith("/.local/share/org.sailfishos/browser/searchEngines/")