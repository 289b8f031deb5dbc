import pytest

from storepulse.config import DEFAULT_CONFIG, ColumnConfig, load_config


def test_defaults_without_file():
    config = load_config(None)

    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG
    config["store"]["id"] = "changed"
    assert DEFAULT_CONFIG["store"]["id"] == "default"


def test_user_sections_merged(tmp_path):
    path = tmp_path / "storepulse.yaml"
    path.write_text(
        "store:\n"
        "  id: shop-9\n"
        "columns:\n"
        "  revenue: gross\n"
        "output_dir: out\n"
    )
    config = load_config(str(path))

    assert config["store"]["id"] == "shop-9"
    assert config["columns"]["revenue"] == "gross"
    assert config["columns"]["date"] is None
    assert config["output_dir"] == "out"
    assert config["logging"]["level"] == "INFO"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_non_mapping_yaml_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_column_config_ignores_unknown_keys():
    columns = ColumnConfig.from_config({"columns": {"revenue": "gross", "colour": "red"}})
    assert columns.revenue == "gross"
    assert columns.date is None


def test_empty_sections_keep_defaults(tmp_path):
    path = tmp_path / "storepulse.yaml"
    path.write_text("store:\nreport:\noutput_dir:\n")
    config = load_config(str(path))

    assert config["store"] == {"id": "default"}
    assert config["report"] == {"month": None, "year": None}
    assert config["output_dir"] == "runs"

    config["store"]["id"] = "shop-4"
    assert DEFAULT_CONFIG["store"]["id"] == "default"


def test_scalar_section_rejected(tmp_path):
    path = tmp_path / "storepulse.yaml"
    path.write_text("store: shop-1\n")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_defaults_carry_only_read_keys():
    assert set(DEFAULT_CONFIG) == {
        "store", "columns", "report", "visuals", "output_dir", "logging",
    }
    assert set(DEFAULT_CONFIG["report"]) == {"month", "year"}
