#!/usr/bin/env python3
"""radixfft command line interface.

Usage:
    python -m radixfft factor 1000
    python -m radixfft good-size 1001 --policy not_smaller
    python -m radixfft transform samples.txt -o spectrum.npy
    python -m radixfft noise --duration 2 --rate 20000 --f0 1 --f1 500 -o noise.npy
    python -m radixfft spectrum iq.npy --rate 48000 --fft-size 2000
    python -m radixfft bench --sizes 1000 1024 2187 --repeat 20
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any

import numpy as np
from scipy import fft as scipy_fft

from radixfft.config import AppConfig, load_config
from radixfft.dsp.fft import (
    UnsupportedLengthError,
    factorize,
    find_good_size,
    get_backend,
    plan_stages,
    plan_transform,
)
from radixfft.dsp.fft.kernels import specialized_radices
from radixfft.dsp.fft.sizes import SIZE_POLICIES
from radixfft.dsp.fft.twiddle import TWIDDLE_MODES
from radixfft.stimulus import create_noise
from radixfft.utils.log_levels import configure_logging
from radixfft.utils.profiler import Profiler

logger = logging.getLogger(__name__)

DEFAULT_BENCH_SIZES = (100, 128, 1000, 1024, 2000, 2048, 2187, 10000)


def _default_config_path() -> str:
    """Config shipped next to the package: backend/config/radixfft.yaml."""
    module_dir = Path(__file__).resolve().parent
    return str(module_dir.parent / "config" / "radixfft.yaml")


def _report_unsupported(exc: UnsupportedLengthError, cfg: AppConfig) -> int:
    suggestion = find_good_size(exc.length, cfg.sizes.policy)
    print(f"Error: {exc}", file=sys.stderr)
    print(f"Try length {suggestion} ({cfg.sizes.policy})", file=sys.stderr)
    return 1


def _load_samples(path: Path) -> tuple[np.ndarray, np.ndarray]:
    data = np.load(path) if path.suffix == ".npy" else np.loadtxt(path, ndmin=1)
    data = np.asarray(data)
    if np.iscomplexobj(data):
        return data.real.ravel(), data.imag.ravel()
    if data.ndim == 1:
        return data.astype(np.float64), np.zeros(data.shape[0])
    if data.ndim == 2 and data.shape[1] == 2:
        return data[:, 0].astype(np.float64), data[:, 1].astype(np.float64)
    raise ValueError(f"expected one column (real) or two columns (re, im), got shape {data.shape}")


def _save(path: Path | None, columns: np.ndarray) -> None:
    if path is None:
        np.savetxt(sys.stdout, columns, fmt="%.17g")
    elif path.suffix == ".npy":
        np.save(path, columns)
    else:
        np.savetxt(path, columns, fmt="%.17g")


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def cmd_factor(args: argparse.Namespace, cfg: AppConfig) -> int:
    """Show the factorization and stage table for a length."""
    try:
        factors = factorize(args.n)
    except UnsupportedLengthError as exc:
        return _report_unsupported(exc, cfg)

    print(f"{args.n} = {' x '.join(str(f) for f in factors)}")
    specialized = specialized_radices()
    print(f"{'stage':>5} {'sofar':>10} {'radix':>6} {'remain':>10}  kernel")
    for i, stage in enumerate(plan_stages(args.n, factors), start=1):
        kernel = "fixed" if stage.actual in specialized else "odd"
        print(f"{i:5d} {stage.sofar:10d} {stage.actual:6d} {stage.remain:10d}  {kernel}")
    return 0


def cmd_good_size(args: argparse.Namespace, cfg: AppConfig) -> int:
    """Print a 5-smooth length near n."""
    policy = args.policy or cfg.sizes.policy
    print(find_good_size(args.n, policy))
    return 0


def cmd_transform(args: argparse.Namespace, cfg: AppConfig) -> int:
    """Transform samples read from a text or .npy file."""
    x_re, x_im = _load_samples(Path(args.input))
    n = x_re.shape[0]
    mode = args.twiddle_mode or cfg.engine.twiddle_mode

    try:
        plan = plan_transform(n, mode)
    except UnsupportedLengthError as exc:
        return _report_unsupported(exc, cfg)

    if args.inverse:
        y_re, y_im = plan.execute(x_re, -x_im)
        y_re, y_im = y_re / n, -y_im / n
    else:
        y_re, y_im = plan.execute(x_re, x_im)

    _save(Path(args.output) if args.output else None, np.column_stack([y_re, y_im]))
    logger.info(f"Transformed {n} samples with factors {plan.factors}")
    return 0


def cmd_noise(args: argparse.Namespace, cfg: AppConfig) -> int:
    """Synthesize a band-limited noise stimulus."""
    samples = create_noise(
        duration_s=args.duration,
        sample_rate=args.rate,
        f0=args.f0,
        f1=args.f1,
        sigma=args.sigma,
        seed=args.seed,
        tone_hz=args.tone_hz,
        tone_phase=args.tone_phase,
        tone_amp=args.tone_amp,
    )
    _save(Path(args.output) if args.output else None, samples)
    logger.info(f"Wrote {samples.size} noise samples")
    return 0


def cmd_spectrum(args: argparse.Namespace, cfg: AppConfig) -> int:
    """Windowed power spectrum of a sample file through the configured backend."""
    x_re, x_im = _load_samples(Path(args.input))
    accelerator = args.accelerator or cfg.backend.accelerator
    fft_size = args.fft_size or cfg.backend.fft_size
    if fft_size > x_re.shape[0]:
        raise ValueError(f"{args.input} has {x_re.shape[0]} samples, fft size is {fft_size}")

    # scipy takes no engine options
    options = {} if accelerator == "scipy" else {"twiddle_mode": cfg.engine.twiddle_mode}
    backend = get_backend(accelerator, fft_size, **options)
    result = backend.execute(x_re + 1j * x_im, args.rate)

    _save(Path(args.output) if args.output else None, np.column_stack([result.freqs, result.power_db]))
    logger.info(f"Spectrum of {fft_size} samples via {backend.name} ({result.bin_hz:.3f} Hz/bin)")
    return 0


def _accuracy_db(y: np.ndarray, ref: np.ndarray) -> float:
    err = float(np.sum(np.abs(y - ref) ** 2))
    power = float(np.sum(np.abs(ref) ** 2))
    if err == 0.0 or power == 0.0:
        return float("-inf")
    return 10.0 * np.log10(err / power)


def cmd_bench(args: argparse.Namespace, cfg: AppConfig) -> int:
    """Time the engine and compare its output with scipy.fft."""
    rng = np.random.default_rng(args.seed)
    mode = args.twiddle_mode or cfg.engine.twiddle_mode
    profiler = Profiler("bench")
    rows: list[dict[str, Any]] = []

    for n in args.sizes:
        try:
            plan = plan_transform(n, mode)
        except UnsupportedLengthError as exc:
            print(f"skip {n}: {exc}", file=sys.stderr)
            continue

        x_re = rng.standard_normal(n)
        x_im = rng.standard_normal(n)
        for _ in range(args.repeat):
            with profiler.measure(str(n)):
                y_re, y_im = plan.execute(x_re, x_im)

        ref = scipy_fft.fft(x_re + 1j * x_im)
        rows.append(
            {
                "n": n,
                "factors": "x".join(str(f) for f in plan.factors),
                "avg_ms": profiler.stats(str(n)).avg_ms,
                "accuracy_db": _accuracy_db(y_re + 1j * y_im, ref),
            }
        )

    print(f"{'length':>8} {'factors':>16} {'time [ms]':>10} {'accuracy [dB]':>14}")
    for row in rows:
        print(f"{row['n']:8d} {row['factors']:>16} {row['avg_ms']:10.3f} {row['accuracy_db']:14.1f}")
    profiler.report()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="radixfft",
        description="Mixed-radix FFT tools",
    )
    parser.add_argument(
        "-c",
        "--config",
        default=os.environ.get("RADIXFFT_CONFIG", _default_config_path()),
        help="Path to YAML config file",
    )
    parser.add_argument("--log-level", default=None, help="Log level (overrides config)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    p_factor = subparsers.add_parser("factor", help="Show factorization and stage plan")
    p_factor.add_argument("n", type=int, help="Transform length")
    p_factor.set_defaults(func=cmd_factor)

    p_size = subparsers.add_parser("good-size", help="Find a 5-smooth length near n")
    p_size.add_argument("n", type=int, help="Requested length")
    p_size.add_argument("--policy", choices=SIZE_POLICIES, default=None,
                        help="Rounding policy (default: from config)")
    p_size.set_defaults(func=cmd_good_size)

    p_transform = subparsers.add_parser("transform", help="Transform samples from a file")
    p_transform.add_argument("input", help="Text file (1 or 2 columns) or .npy array")
    p_transform.add_argument("-o", "--output", help="Output file (.npy or text); stdout if omitted")
    p_transform.add_argument("--inverse", action="store_true", help="Inverse transform (scaled by 1/n)")
    p_transform.add_argument("--twiddle-mode", choices=TWIDDLE_MODES, default=None)
    p_transform.set_defaults(func=cmd_transform)

    p_noise = subparsers.add_parser("noise", help="Synthesize band-limited noise")
    p_noise.add_argument("--duration", type=float, required=True, help="Duration in seconds")
    p_noise.add_argument("--rate", type=float, required=True, help="Sample rate in Hz")
    p_noise.add_argument("--f0", type=float, default=0.0, help="Lower band edge in Hz")
    p_noise.add_argument("--f1", type=float, required=True, help="Upper band edge in Hz")
    p_noise.add_argument("--sigma", type=float, default=1.0, help="Noise standard deviation")
    p_noise.add_argument("--seed", type=int, default=None)
    p_noise.add_argument("--tone-hz", type=float, default=0.0)
    p_noise.add_argument("--tone-phase", type=float, default=0.0, help="Tone phase in radians")
    p_noise.add_argument("--tone-amp", type=float, default=0.0)
    p_noise.add_argument("-o", "--output", help="Output file (.npy or text); stdout if omitted")
    p_noise.set_defaults(func=cmd_noise)

    p_spectrum = subparsers.add_parser("spectrum", help="Power spectrum through a spectrum backend")
    p_spectrum.add_argument("input", help="Text file (1 or 2 columns) or .npy array")
    p_spectrum.add_argument("--rate", type=float, required=True, help="Sample rate in Hz")
    p_spectrum.add_argument("--fft-size", type=_positive_int, default=None,
                            help="Transform size (default: backend.fft_size from config)")
    p_spectrum.add_argument("--accelerator", default=None,
                            help="Backend name or auto (default: backend.accelerator from config)")
    p_spectrum.add_argument("-o", "--output", help="Output file (.npy or text); stdout if omitted")
    p_spectrum.set_defaults(func=cmd_spectrum)

    p_bench = subparsers.add_parser("bench", help="Benchmark speed and accuracy")
    p_bench.add_argument("--sizes", type=int, nargs="+", default=list(DEFAULT_BENCH_SIZES))
    p_bench.add_argument("--repeat", type=_positive_int, default=10, help="Runs per length (>= 1)")
    p_bench.add_argument("--seed", type=int, default=0)
    p_bench.add_argument("--twiddle-mode", choices=TWIDDLE_MODES, default=None)
    p_bench.set_defaults(func=cmd_bench)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        cfg = load_config(args.config)
    except (OSError, TypeError, ValueError) as exc:
        print(f"Error: invalid config {args.config}: {exc}", file=sys.stderr)
        return 1

    configure_logging(args.log_level or cfg.logging.level)

    try:
        return int(args.func(args, cfg))
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
