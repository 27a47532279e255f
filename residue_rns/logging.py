"""
Structured logging for residue_rns validation runs.

Produces:
  - manifest.json: One-time run metadata (git hash, config, versions)
  - checks.jsonl: One record per PASS/FAIL check
  - metrics.jsonl: Timing and throughput records
"""

import json
import hashlib
import platform
import subprocess
import sys
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Any

import numpy as np


@dataclass
class RunManifest:
    """Run-level metadata, saved once per run."""
    run_id: str
    timestamp: str
    git_commit: str
    config_hash: str
    node_name: str
    python_version: str
    numpy_version: str
    package_version: str
    config: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save(self, path: Path):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2, default=str)


def _get_git_commit() -> str:
    """Get current git commit hash, or 'unknown'."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True, text=True, timeout=5,
        )
    except (OSError, subprocess.SubprocessError):
        return "unknown"
    return result.stdout.strip() if result.returncode == 0 else "unknown"


def _config_hash(config: Dict[str, Any]) -> str:
    """Deterministic hash of config dict."""
    s = json.dumps(config, sort_keys=True, default=str)
    return hashlib.sha256(s.encode()).hexdigest()[:16]


def create_manifest(run_id: str, config: Dict[str, Any]) -> RunManifest:
    """Create a RunManifest with auto-detected metadata."""
    from . import __version__

    return RunManifest(
        run_id=run_id,
        timestamp=time.strftime("%Y-%m-%dT%H:%M:%S%z"),
        git_commit=_get_git_commit(),
        config_hash=_config_hash(config),
        node_name=platform.node(),
        python_version=sys.version,
        numpy_version=np.__version__,
        package_version=__version__,
        config=config,
    )


class RunLogger:
    """Structured JSONL logger for one validation run.

    Writes two files (append mode, so reruns into the same directory
    accumulate):
      - checks.jsonl   (one record per check)
      - metrics.jsonl  (timing / throughput data)
    """

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self._checks_path = self.output_dir / "checks.jsonl"
        self._metrics_path = self.output_dir / "metrics.jsonl"

        self._checks_f = open(self._checks_path, 'a')
        self._metrics_f = open(self._metrics_path, 'a')

        self._passed = 0
        self._failed = 0

    def log_check(self, section: str, name: str, passed: bool, detail: str = ""):
        """Log one PASS/FAIL check."""
        record = {
            "section": section,
            "name": name,
            "passed": bool(passed),
            "detail": detail,
            "timestamp": time.time(),
        }
        self._checks_f.write(json.dumps(record, default=str) + "\n")
        self._checks_f.flush()
        if passed:
            self._passed += 1
        else:
            self._failed += 1

    def log_metrics(self, record: Dict[str, Any]):
        """Log timing / performance metrics."""
        record = dict(record)
        record["timestamp"] = time.time()
        self._metrics_f.write(json.dumps(record, default=str) + "\n")
        self._metrics_f.flush()

    def close(self):
        """Flush and close all log files."""
        for f in [self._checks_f, self._metrics_f]:
            if not f.closed:
                f.flush()
                f.close()

    @property
    def summary(self) -> Dict[str, int]:
        return {
            "checks_passed": self._passed,
            "checks_failed": self._failed,
        }

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
