# sailbrowser

The storage and support layer of a mobile web browser. It keeps tabs, the
navigation history of each tab, global browsing history and settings in a
SQLite database. It also finds OpenSearch engine descriptions, gives the
browser's standard directories, and moves data restored from older backups
to the current layout.

It needs only the Python standard library. `sailbrowser.paths` uses the
`pwd` and `grp` modules, so the package runs on POSIX systems.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Storage

### DBManager

`sailbrowser.dbmanager.DBManager` is the front end. It runs every storage
operation on one background thread. Queued operations (`create_tab`,
`get_all_tabs`, `remove_tab`, `navigate_to`, `update_thumb_path`,
`update_title`, `add_history_entry`, `remove_history_entry`,
`remove_history_entry_by_url`, `clear_history`, `get_history`,
`get_tab_history`) return a `concurrent.futures.Future`. Blocking operations
(`remove_all_tabs`, `go_forward`, `go_back`, `save_setting`,
`delete_setting`, `get_max_tab_id`) wait for the worker. `wait()` blocks
until everything queued so far has run.

Results are also reported through signals (`sailbrowser.events.Signal`):
`tabs_available`, `history_available`, `tab_history_available`,
`title_changed` and `thumb_path_changed` are emitted from the worker thread;
`settings_changed` is emitted from the calling thread. Settings are loaded
once and cached, so `get_setting` never waits and returns `""` for a name
that is not set; `settings` gives a copy of the cache.

```python
from sailbrowser.dbmanager import DBManager
from sailbrowser.tab import Tab

manager = DBManager("/tmp/browser.sqlite")
manager.tabs_available.connect(lambda tabs: print(tabs))

manager.create_tab(Tab(1, "https://example.com", "Example", ""))
manager.navigate_to(1, "https://example.com/next", "", "")
manager.go_back(1)
manager.get_all_tabs()
manager.wait()

manager.save_setting("homepage", "https://example.com")
print(manager.get_setting("homepage"))
manager.close()
```

`DBManager.instance()` returns a shared manager, created on first use;
closing it clears the shared instance. Both `DBManager` and `DBWorker` can
be used as context managers. Without a path, the database file
`sailfish-browser.sqlite` is placed in the data location from
`sailbrowser.paths`.

### DBWorker

`sailbrowser.dbworker.DBWorker` runs the same operations at once on the
calling thread and returns their results, e.g. `get_all_tabs()` returns a
list of `Tab`, `get_history(filter)` the 20 newest matching `Link`s, and
`get_tab_history(tab_id)` the tab's links newest first together with the id
of the current link (`-1` if none). A failed SQL statement is logged and
emitted on its `error` signal; the operation then stops without raising.
Visits to `about:` pages are never recorded in browsing history.

### Schema

`sailbrowser.schema` opens the database (`open_database`), creates the
tables of a new one (`create_schema`), reads and sets the schema version
(`user_version`, `set_user_version`), migrates an old `history` table into
`browser_history` (`migrate_to_1`) and, when an existing database is
opened, keeps only the newest 2000 history entries (`trim_history`).

## Data types

- `sailbrowser.link.Link`: one history entry with `link_id`, `url`,
  `thumb_path`, `title` and `date`; `is_valid()` is true for a positive id
  and a non-empty url.
- `sailbrowser.tab.Tab`: one tab with `tab_id`, `url`, `title`,
  `thumbnail_path` and `desktop_mode`; `is_valid()` is true for a positive
  id. `desktop_mode` is not part of equality.

## Paths

`sailbrowser.paths` gives the download, pictures, data, applications and
cache directories (`download_location()`, `pictures_location()`,
`data_location()`, `applications_location()`, `cache_location()`), honouring
the XDG environment variables and creating the directories when missing;
each returns `None` if its directory can't be created. `create_directory`
makes a directory owned by the user and the user's group with mode 0770.
`captive_portal(argv)` and `profile_name(argv)` read the `-captiveportal`
and `-profile` options from an argument list (`sys.argv` by default).

## OpenSearch

`sailbrowser.opensearch.OpenSearchConfigs` scans directories for `*.xml`
OpenSearch descriptions and maps each engine's `ShortName` to the file that
describes it. Files that can't be parsed are skipped; when two files give
the same name, the later directory wins.

```python
from sailbrowser.opensearch import OpenSearchConfigs

configs = OpenSearchConfigs(["/usr/share/search/"])
print(configs.search_engine_list())
print(configs.available_configs())
```

`default_configs()` returns a shared instance over the built-in directory
and the user's directory (`user_opensearch_path(home)`).

## Backup

`sailbrowser.backup.backup_info()` describes which browser files, relative
to the home directory, go into a backup, and its options.
`fix_import(data_dir, bin_dir)` moves files restored from older backups to
the current layout, using `fix` for single files and `fix_dir` for the
cache directory; neither overwrites an existing destination.

## What this package does not do

It has no web engine, no user interface and no command-line program. It
does not stop a running browser before a backup, and it does not perform
the backup or restore itself: it only describes the files and converts an
old layout that is already on disk.