from pathlib import Path

from railmap.profiles import apply_profile, env_defaults, load_profiles


def test_load_and_apply_profile(tmp_path: Path):
    cfg = tmp_path / "profiles.yaml"
    cfg.write_text(
        """
demo:
  out: "out/demo"
  zoom: 7
        """,
        encoding="utf-8",
    )
    profiles = load_profiles(cfg)
    assert "demo" in profiles
    merged = apply_profile("demo", profiles, {"out": None})
    assert merged["out"] == "out/demo"
    # CLI override wins
    merged2 = apply_profile("demo", profiles, {"out": "elsewhere"})
    assert merged2["out"] == "elsewhere"
    assert merged2["zoom"] == 7


def test_missing_profiles_file(tmp_path: Path):
    assert load_profiles(tmp_path / "nope.yaml") == {}


def test_env_defaults(monkeypatch):
    monkeypatch.setenv("RAILMAP_CACHE", "/tmp/c.sqlite")
    monkeypatch.delenv("RAILMAP_DATASET", raising=False)
    merged = env_defaults({"cache": None, "dataset": None})
    assert merged["cache"] == "/tmp/c.sqlite"
    assert merged["dataset"] is None
    assert env_defaults({"cache": "x"})["cache"] == "x"
