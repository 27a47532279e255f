"""
Tests for YAML configuration, JSONL run logging and the validation script.
"""

import importlib.util
import json
import sys
import os
from pathlib import Path

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from residue_rns import (
    InvalidConfiguration, RnsConfig, load_config, config_from_dict,
    RunLogger, create_manifest, default_moduli,
)

REPO_ROOT = Path(__file__).resolve().parent.parent.parent


class TestConfig:
    def test_defaults(self):
        config = RnsConfig()
        assert config.modulus_set() == default_moduli(3)
        assert config.to_dict()["samples"] == 200

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("moduli: [3, 5, 7]\nsigned: true\nsamples: 10\n")
        config = load_config(path)
        assert config.modulus_set().moduli == (3, 5, 7)
        assert config.signed is True
        assert config.samples == 10

    def test_n_moduli(self):
        assert len(config_from_dict({"n_moduli": 5}).modulus_set()) == 5

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == RnsConfig()

    def test_unknown_keys_warn(self):
        with pytest.warns(UserWarning, match="bogus"):
            config = config_from_dict({"bogus": 1, "seed": 7})
        assert config.seed == 7

    def test_bad_moduli(self):
        with pytest.raises(InvalidConfiguration):
            config_from_dict({"moduli": 15})
        with pytest.raises(InvalidConfiguration):
            config_from_dict({"moduli": [6, 9]}).modulus_set()

    def test_explicit_empty_moduli_rejected(self):
        config = config_from_dict({"moduli": []})
        with pytest.raises(InvalidConfiguration):
            config.modulus_set()

    def test_null_moduli_uses_default(self):
        assert config_from_dict({"moduli": None, "n_moduli": 4}).modulus_set() == default_moduli(4)

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(InvalidConfiguration):
            load_config(path)

    def test_shipped_config(self):
        config = load_config(REPO_ROOT / "configs" / "default.yaml")
        assert config.modulus_set().moduli == (251, 253, 255)


class TestRunLogger:
    def test_checks_and_metrics(self, tmp_path):
        with RunLogger(tmp_path) as logger:
            logger.log_check("s", "ok", True)
            logger.log_check("s", "bad", False, "detail")
            logger.log_metrics({"wall_time_sec": 0.5})
            assert logger.summary == {"checks_passed": 1, "checks_failed": 1}

        checks = [json.loads(line) for line in (tmp_path / "checks.jsonl").read_text().splitlines()]
        assert [c["name"] for c in checks] == ["ok", "bad"]
        assert checks[1]["detail"] == "detail"
        metrics = [json.loads(line) for line in (tmp_path / "metrics.jsonl").read_text().splitlines()]
        assert metrics[0]["wall_time_sec"] == 0.5

    def test_manifest(self, tmp_path):
        config = RnsConfig().to_dict()
        manifest = create_manifest("run1", config)
        manifest.save(tmp_path / "sub" / "manifest.json")
        data = json.loads((tmp_path / "sub" / "manifest.json").read_text())
        assert data["run_id"] == "run1"
        assert data["config"] == config
        assert len(data["config_hash"]) == 16
        assert create_manifest("run2", config).config_hash == manifest.config_hash


def _load_script(name):
    spec = importlib.util.spec_from_file_location(name, REPO_ROOT / "scripts" / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestScripts:
    def test_validate_passes(self, tmp_path, capsys):
        validate = _load_script("validate_rns")
        rc = validate.main(["--samples", "20", "--output-dir", str(tmp_path)])
        out = capsys.readouterr().out
        assert rc == 0, out
        assert "0 failed" in out
        assert (tmp_path / "manifest.json").exists()
        checks = (tmp_path / "checks.jsonl").read_text().splitlines()
        assert checks and all(json.loads(c)["passed"] for c in checks)

    def test_demo(self, capsys):
        demo = _load_script("rns_demo")
        assert demo.main(["5", "7"]) == 0
        out = capsys.readouterr().out
        assert "RNS(5 mod 251, 5 mod 253, 5 mod 255)" in out
        assert "= 12" in out
        assert "= 35" in out
