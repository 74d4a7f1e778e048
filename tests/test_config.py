import pytest

from erdkit import config


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    home = tmp_path / "home"
    xdg = tmp_path / "xdg"
    home.mkdir()
    xdg.mkdir()
    monkeypatch.delenv("ERDTREE_CONFIG_PATH", raising=False)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    return home, xdg


def test_parse_drops_comments_and_splits_whitespace():
    text = "--\n--icons\n# a comment\n   # indented comment\n--level   2\n\n--human\t--prune"
    assert config.parse(text) == ["--", "--icons", "--level", "2", "--human", "--prune"]


def test_parse_keeps_hash_inside_line():
    assert config.parse("--pattern a#b") == ["--pattern", "a#b"]


def test_parse_empty_text():
    assert config.parse("") == []


def test_parse_handles_crlf():
    assert config.parse("--icons\r\n--human\r\n") == ["--icons", "--human"]


def test_read_from_config_path(clean_env, monkeypatch, tmp_path):
    rc = tmp_path / "custom_rc"
    rc.write_text("--icons\n", encoding="utf-8")
    monkeypatch.setenv("ERDTREE_CONFIG_PATH", str(rc))
    assert config.read_config_to_string() == "--\n--icons\n"


def test_config_path_takes_precedence(clean_env, monkeypatch, tmp_path):
    home, xdg = clean_env
    (xdg / ".erdtreerc").write_text("--human", encoding="utf-8")
    rc = tmp_path / "custom_rc"
    rc.write_text("--icons", encoding="utf-8")
    monkeypatch.setenv("ERDTREE_CONFIG_PATH", str(rc))
    assert config.read_config_to_string() == "--\n--icons"


def test_xdg_erdtree_dir_before_xdg_root(clean_env):
    home, xdg = clean_env
    (xdg / "erdtree").mkdir()
    (xdg / "erdtree" / ".erdtreerc").write_text("--icons", encoding="utf-8")
    (xdg / ".erdtreerc").write_text("--human", encoding="utf-8")
    assert config.read_config_to_string() == "--\n--icons"


def test_xdg_before_home(clean_env):
    home, xdg = clean_env
    (xdg / ".erdtreerc").write_text("--human", encoding="utf-8")
    (home / ".erdtreerc").write_text("--icons", encoding="utf-8")
    assert config.read_config_to_string() == "--\n--human"


def test_home_config_dir_before_home_root(clean_env):
    home, _ = clean_env
    nested = home / ".config" / "erdtree"
    nested.mkdir(parents=True)
    (nested / ".erdtreerc").write_text("--prune", encoding="utf-8")
    (home / ".erdtreerc").write_text("--icons", encoding="utf-8")
    assert config.read_config_to_string() == "--\n--prune"


def test_home_root_used_last(clean_env):
    home, _ = clean_env
    (home / ".erdtreerc").write_text("--icons", encoding="utf-8")
    assert config.read_config_to_string() == "--\n--icons"


def test_missing_config_returns_none(clean_env):
    assert config.read_config_to_string() is None


def test_unreadable_config_path_falls_through(clean_env, monkeypatch, tmp_path):
    home, _ = clean_env
    monkeypatch.setenv("ERDTREE_CONFIG_PATH", str(tmp_path / "missing"))
    (home / ".erdtreerc").write_text("--icons", encoding="utf-8")
    assert config.read_config_to_string() == "--\n--icons"


def test_non_utf8_config_is_skipped(clean_env, monkeypatch, tmp_path):
    rc = tmp_path / "binary_rc"
    rc.write_bytes(b"\xff\xfe\x00bad")
    monkeypatch.setenv("ERDTREE_CONFIG_PATH", str(rc))
    assert config.read_config_to_string() is None


def test_read_then_parse_round_trip(clean_env, monkeypatch, tmp_path):
    rc = tmp_path / "rc"
    rc.write_text("# defaults\n--icons --human\n--level 3\n", encoding="utf-8")
    monkeypatch.setenv("ERDTREE_CONFIG_PATH", str(rc))
    assert config.parse(config.read_config_to_string()) == [
        "--",
        "--icons",
        "--human",
        "--level",
        "3",
    ]