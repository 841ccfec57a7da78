"""
Experiment runner: time merge_sort (and baselines) across input sizes.

Usage (from repo root):
    python -m mergetrace.bench.runner experiments/configs/merge_vs_timsort.yaml

Outputs in a new run directory <output_dir>/<timestamp>_<experiment_name>/:
    - config_resolved.yaml    # the config as loaded
    - meta.json               # python/numpy/pandas/psutil versions, machine, git commit
    - results.jsonl           # one line per timing sample, plus one per failure
    - summary.csv             # per (algo, n): median/IQR/min/max ns, comparisons

Design notes:
- Each size n gets ONE dataset, shared by every algorithm.
- With `validate: true` (default) each algorithm's output at size n is
  checked against the oracle once, untimed, before timing.
- Algorithms that define `count_operations(a)` get a "comparisons" column.
- After a timeout, error or invalid output, the algorithm is dropped for
  all larger sizes.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import importlib
import json
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from mergetrace.bench.measure import time_sort_call
from mergetrace.datasets import make_dataset
from mergetrace.validate import verify_output

__all__ = ["REQUIRED_KEYS", "AlgoSpec", "summarize", "run_experiment", "main"]

console = Console()

REQUIRED_KEYS = [
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "sizes",
    "algorithms",
]

SUMMARY_COLUMNS = ["algo", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns", "comparisons"]


@dataclass(frozen=True)
class AlgoSpec:
    name: str
    sort_fn: Callable[..., List[int]]
    config: Dict[str, Any]
    count_fn: Optional[Callable[[List[int]], Dict[str, Any]]] = None


# ------------------------- config & run directory ------------------------- #

def _load_config(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Experiment config must be a YAML mapping: {path}")
    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")
    sizes = cfg["sizes"]
    if not isinstance(sizes, list) or not sizes or not all(isinstance(n, int) and not isinstance(n, bool) and n >= 0 for n in sizes):
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")
    if not isinstance(cfg["algorithms"], list) or not cfg["algorithms"]:
        raise ValueError("Config 'algorithms' must be a non-empty list")
    return cfg


def _make_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    stamp = _dt.datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = base_dir / f"{stamp}_{experiment_name}"
    run_dir.mkdir(exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
    }


def _resolve_algorithms(entries: List[Dict[str, Any]]) -> List[AlgoSpec]:
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in entries:
        name = entry.get("name") if isinstance(entry, dict) else None
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        if name in seen:
            raise ValueError(f"Duplicate algorithm name in config: {name}")
        seen.add(name)

        try:
            mod = importlib.import_module(f"mergetrace.algorithms.{name}")
        except ImportError as e:
            raise ImportError(f"Could not import algorithm module 'mergetrace.algorithms.{name}': {e!r}") from e
        if not callable(getattr(mod, "sort", None)):
            raise AttributeError(f"Algorithm module '{name}' must define `sort(a, *, config=None)`")

        config = entry.get("config") or {}
        if not isinstance(config, dict):
            raise ValueError(f"Algorithm '{name}': 'config' must be a dict if provided")

        specs.append(AlgoSpec(name=name, sort_fn=mod.sort, config=config, count_fn=getattr(mod, "count_operations", None)))
    return specs


def _append_jsonl(record: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(record, separators=(",", ":")))
        f.write("\n")


# ------------------------- aggregation & display ------------------------- #

def _iqr(s: pd.Series) -> float:
    return s.quantile(0.75) - s.quantile(0.25)


def summarize(results_path: Path) -> pd.DataFrame:
    """Aggregate results.jsonl into one row per (algo, n)."""
    if not results_path.exists() or results_path.stat().st_size == 0:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(results_path, lines=True)
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    if "comparisons" not in df.columns:
        df = df.assign(comparisons=np.nan)

    out = df.groupby(["algo", "n"], as_index=False).agg(
        samples_ok=("time_ns", "count"),
        median_ns=("time_ns", "median"),
        iqr_ns=("time_ns", _iqr),
        min_ns=("time_ns", "min"),
        max_ns=("time_ns", "max"),
        comparisons=("comparisons", "max"),
    )
    for col in ("median_ns", "iqr_ns", "min_ns", "max_ns"):
        out[col] = out[col].astype("int64")
    return out[SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def _print_summary(summary: pd.DataFrame) -> None:
    table = Table(title="Benchmark Summary (median ± IQR in ms)")
    table.add_column("Algorithm", style="bold")
    table.add_column("n", justify="right")
    table.add_column("time", justify="right")
    table.add_column("comparisons", justify="right")
    for row in summary.itertuples(index=False):
        comparisons = "—" if pd.isna(row.comparisons) else str(int(row.comparisons))
        table.add_row(
            row.algo,
            str(row.n),
            f"{row.median_ns / 1e6:.3f} ± {row.iqr_ns / 1e6:.3f}",
            comparisons,
        )
    console.print()
    console.print(table)


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path) -> Path:
    """Run the sweep described by `config_path`; return the run directory."""
    cfg = _load_config(config_path)

    experiment_name = str(cfg["experiment_name"])
    sizes: List[int] = list(cfg["sizes"])
    repeats = int(cfg["repeats"])
    warmup = bool(cfg["warmup"])
    disable_gc = bool(cfg["disable_gc"])
    timeout_seconds = float(cfg["timeout_seconds"])
    validate = bool(cfg.get("validate", True))
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])
    algos = _resolve_algorithms(list(cfg["algorithms"]))

    run_dir = _make_run_dir(Path(cfg["output_dir"]), experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"

    with (run_dir / "config_resolved.yaml").open("w", encoding="utf-8") as f:
        yaml.safe_dump(cfg, f, sort_keys=False)
    with (run_dir / "meta.json").open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))
    dropped = set()

    console.print(f"[bold green]Run directory:[/bold green] {run_dir}")
    console.print(f"[bold]Algorithms:[/bold] {', '.join(a.name for a in algos)}")

    for n in tqdm(sizes, desc="Sizes", unit="n"):
        base_a = make_dataset(n, dataset_spec, rng)

        for algo in algos:
            if algo.name in dropped:
                continue
            base_record = {"algo": algo.name, "n": n, "config": algo.config}

            if validate:
                try:
                    problems = verify_output(base_a, algo.sort_fn(list(base_a), config=algo.config))
                except Exception as e:
                    problems = [f"raised {e!r}"]
                if problems:
                    dropped.add(algo.name)
                    _append_jsonl({**base_record, "status": "invalid", "problems": problems}, results_path)
                    continue

            comparisons = algo.count_fn(list(base_a))["comparisons"] if algo.count_fn else None

            res = time_sort_call(
                algo_name=algo.name,
                algo_fn=algo.sort_fn,
                a=base_a,
                config=algo.config,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
            )
            for trial, t_ns in enumerate(res.samples_ns):
                record = {**base_record, "dataset": dataset_spec, "trial": trial, "time_ns": t_ns}
                if comparisons is not None:
                    record["comparisons"] = comparisons
                _append_jsonl(record, results_path)

            if not res.ok:
                dropped.add(algo.name)
                _append_jsonl(
                    {
                        **base_record,
                        "status": res.status,
                        "error": res.error,
                        "timed_out_on_repeat": res.timed_out_on_repeat,
                    },
                    results_path,
                )

    summary = summarize(results_path)
    summary.to_csv(summary_path, index=False)
    _print_summary(summary)
    console.print(f"[bold green]Done.[/bold green] Wrote {results_path} and {summary_path}")
    return run_dir


# ------------------------- CLI ------------------------- #

def main(argv: Optional[List[str]] = None) -> None:
    p = argparse.ArgumentParser(description="Run a sorting benchmark experiment from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    args = p.parse_args(argv)

    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
