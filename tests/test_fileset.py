import logging
import os
import pytest
import structlog
from pathlib import Path

from filesets import INFINITE, Fileset, FilesetOption, InvalidArgument, LinksPolicy, OptionsRequest, merge

@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Creates root/a/, root/a/b and root/c."""
    root = tmp_path / "root"
    root.mkdir()
    (root / "a").mkdir()
    (root / "a" / "b").write_text("b")
    (root / "c").write_text("c")
    return root

@pytest.fixture
def deep_tree(tmp_path: Path) -> Path:
    """Creates root/a/b/c/d.txt."""
    root = tmp_path / "deep"
    (root / "a" / "b" / "c").mkdir(parents=True)
    (root / "a" / "b" / "c" / "d.txt").write_text("d")
    return root

def _ab() -> str:
    return os.path.join("a", "b")

# --- construction ---

def test_defaults(tree: Path):
    fs = Fileset(str(tree))
    assert fs.path == str(tree)
    assert fs.ignore == []
    assert fs.links == LinksPolicy.MANAGE
    assert fs.recurse is False
    assert fs.recurselimit is INFINITE
    assert fs.checksum_type is None

def test_accepts_path_objects(tree: Path):
    assert Fileset(tree).path == str(tree)

def test_trailing_separators_are_stripped(tree: Path):
    assert Fileset(str(tree) + "/").path == str(tree)
    assert Fileset(str(tree) + "//").path == str(tree)

def test_filesystem_root_keeps_its_separator():
    assert Fileset("/").path == "/"

def test_relative_path_is_rejected():
    with pytest.raises(InvalidArgument, match="fully qualified"):
        Fileset("relative/path")

def test_missing_path_is_rejected(tmp_path: Path):
    with pytest.raises(InvalidArgument, match="must exist"):
        Fileset(str(tmp_path / "missing"))

def test_integer_recurse_is_rejected(tree: Path):
    with pytest.raises(InvalidArgument, match="recurselimit"):
        Fileset(str(tree), {"recurse": 1})

def test_unknown_option_is_rejected(tree: Path):
    with pytest.raises(InvalidArgument, match="Invalid option 'bogus'"):
        Fileset(str(tree), {"bogus": True})

def test_invalid_links_value_is_rejected(tree: Path):
    with pytest.raises(InvalidArgument, match="links"):
        Fileset(str(tree), {"links": "sometimes"})

def test_options_map_goes_through_setters(tree: Path):
    fs = Fileset(
        str(tree),
        {"recurse": True, "recurselimit": 2, "links": "follow", "ignore": "*.tmp", "checksum_type": "sha256"},
    )
    assert fs.recurse is True
    assert fs.recurselimit == 2
    assert fs.links == LinksPolicy.FOLLOW
    assert fs.ignore == ["*.tmp"]
    assert fs.checksum_type == "sha256"

def test_checksum_type_alias(tree: Path):
    fs = Fileset(str(tree), {"checksumType": "md5"})
    assert fs.checksum_type == "md5"

# --- setters ---

def test_single_ignore_pattern_is_wrapped(tree: Path):
    fs = Fileset(str(tree))
    fs.ignore = "*.txt"
    assert fs.ignore == ["*.txt"]

def test_setters_revalidate(tree: Path):
    fs = Fileset(str(tree))
    with pytest.raises(InvalidArgument):
        fs.links = "bogus"
    with pytest.raises(InvalidArgument):
        fs.recurse = 3
    with pytest.raises(InvalidArgument):
        fs.recurse = "yes"
    with pytest.raises(InvalidArgument):
        fs.recurselimit = -1
    with pytest.raises(InvalidArgument):
        fs.recurselimit = True
    with pytest.raises(InvalidArgument):
        fs.recurselimit = "deep"
    assert fs.links == LinksPolicy.MANAGE
    assert fs.recurse is False
    assert fs.recurselimit is INFINITE

def test_recurselimit_accepts_infinite_spellings(tree: Path):
    fs = Fileset(str(tree), {"recurselimit": 3})
    fs.recurselimit = "infinite"
    assert fs.recurselimit is INFINITE
    fs.recurselimit = 0
    fs.recurselimit = INFINITE
    assert fs.recurselimit is INFINITE

def test_set_option_accepts_enum_keys(tree: Path):
    fs = Fileset(str(tree))
    fs.set_option(FilesetOption.RECURSE, True)
    assert fs.recurse is True

# --- files() ---

def test_no_recursion_lists_only_root(tree: Path):
    assert Fileset(str(tree)).files() == ["."]

def test_unbounded_recursion_is_breadth_first(tree: Path):
    files = Fileset(str(tree), {"recurse": True}).files()
    assert files[0] == "."
    assert set(files[1:3]) == {"a", "c"}
    assert files[3:] == [_ab()]

def test_zero_limit_is_same_as_no_recursion(tree: Path):
    assert Fileset(str(tree), {"recurse": True, "recurselimit": 0}).files() == ["."]

def test_limit_one_drops_deeper_entries(tree: Path):
    files = Fileset(str(tree), {"recurse": True, "recurselimit": 1}).files()
    assert files[0] == "."
    assert sorted(files[1:]) == ["a", "c"]

def test_limit_bounds_deep_tree(deep_tree: Path):
    files = Fileset(str(deep_tree), {"recurse": True, "recurselimit": 2}).files()
    assert files == [".", "a", _ab()]

def test_ignore_prunes_subtree(tree: Path):
    files = Fileset(str(tree), {"recurse": True, "ignore": "b*"}).files()
    assert files[0] == "."
    assert sorted(files[1:]) == ["a", "c"]

def test_ignore_prunes_directories_with_their_contents(deep_tree: Path):
    files = Fileset(str(deep_tree), {"recurse": True, "ignore": ["b"]}).files()
    assert files == [".", "a"]

def test_ignore_matches_base_name_only(tree: Path):
    files = Fileset(str(tree), {"recurse": True, "ignore": [_ab()]}).files()
    assert _ab() in files

def test_ignore_with_only_none_ignores_nothing(tree: Path):
    files = Fileset(str(tree), {"recurse": True, "ignore": [None]}).files()
    assert len(files) == 4

def test_files_is_repeatable(tree: Path):
    fs = Fileset(str(tree), {"recurse": True})
    assert fs.files() == fs.files()

def test_filesystem_root_relativizes_cleanly():
    fs = Fileset("/", {"recurse": True, "recurselimit": 1})
    files = fs.files()
    assert files[0] == "."
    assert all(not f.startswith("/") for f in files)

# --- request options ---

def test_request_strings_are_coerced(tree: Path):
    request = OptionsRequest(key="modules/root", options={"recurse": "true", "recurselimit": "1", "links": "follow"})
    fs = Fileset(str(tree), request)
    assert fs.recurse is True
    assert fs.recurselimit == 1
    assert fs.links == LinksPolicy.FOLLOW
    assert sorted(fs.files()) == [".", "a", "c"]

def test_request_accepts_enum_keys_and_false(tree: Path):
    request = OptionsRequest(options={FilesetOption.RECURSE: "false", FilesetOption.IGNORE: "c"})
    fs = Fileset(str(tree), request)
    assert fs.recurse is False
    assert fs.ignore == ["c"]

def test_request_numeric_recurse_is_rejected(tree: Path):
    with pytest.raises(InvalidArgument, match="recurselimit"):
        Fileset(str(tree), OptionsRequest(options={"recurse": "2"}))

def test_request_ignores_keys_outside_allow_list(tree: Path):
    fs = Fileset(str(tree), OptionsRequest(options={"environment": "production", "recurse": True}))
    assert fs.recurse is True

# --- ignore semantics on a real tree ---

@pytest.fixture
def named_tree(tmp_path: Path) -> Path:
    root = tmp_path / "named"
    root.mkdir()
    for name in ("keep.txt", "notes.txt", ".hidden", "!bang", "#hash", "plain"):
        (root / name).write_text(name)
    return root

def test_negated_pattern_does_not_unignore(named_tree: Path):
    files = Fileset(str(named_tree), {"recurse": True, "ignore": ["*.txt", "!keep.txt"]}).files()
    assert "keep.txt" not in files
    assert "notes.txt" not in files
    assert "plain" in files

def test_bang_and_hash_names_can_be_ignored(named_tree: Path):
    files = Fileset(str(named_tree), {"recurse": True, "ignore": ["!bang", "#hash"]}).files()
    assert sorted(files) == sorted([".", "keep.txt", "notes.txt", ".hidden", "plain"])

def test_star_keeps_dotfiles(named_tree: Path):
    assert Fileset(str(named_tree), {"recurse": True, "ignore": "*"}).files() == [".", ".hidden"]

def test_invalid_links_is_reported_once(tree: Path, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.DEBUG, logger="filesets"):
        with pytest.raises(InvalidArgument, match="links"):
            Fileset(str(tree), {"links": "sometimes"})
    assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []

def test_library_use_writes_nothing_to_stdout(tree: Path, capsys: pytest.CaptureFixture):
    structlog.reset_defaults()
    fs = Fileset(str(tree), {"recurse": True, "links": "follow"})
    fs.files()
    merge(fs, Fileset(str(tree)))
    assert capsys.readouterr().out == ""
