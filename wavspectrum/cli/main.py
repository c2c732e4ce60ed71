"""WavSpectrum CLI - block-wise FFT of PCM WAV files."""
from __future__ import annotations
import argparse
import json
import logging
import sys

from wavspectrum.version import __version__
from wavspectrum.types import AnalysisConfig
from wavspectrum.errors import InvalidLengthError, WavDecodeError
from wavspectrum.io.wav import load_wav
from wavspectrum.dsp.segment import segment
from wavspectrum.analysis.spectrum import analyze_wav, block_peaks
from wavspectrum.config.loader import load_analysis_config
from wavspectrum.reporting.emitter import emit_spectrum


EXIT_OK = 0
EXIT_BAD_ARGS = 2
EXIT_DECODE_ERROR = 3
EXIT_CONFIG_ERROR = 4
EXIT_INTERNAL_ERROR = 5


def configure_logging(level: str) -> None:
    """Configure logging format and level; log records go to stderr."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _resolve_config(args) -> AnalysisConfig:
    """Load --config if given and apply the --window-size override."""
    cfg = load_analysis_config(args.config) if args.config else AnalysisConfig()
    if args.window_size is not None:
        w = int(args.window_size)
        if w <= 0 or w & (w - 1):
            raise ValueError(f"--window-size must be a positive power of two, got {w}.")
        cfg = AnalysisConfig(window_size=w)
    return cfg


def _run_guarded(args, action) -> int:
    """Run action() and map failures to exit codes."""
    try:
        try:
            cfg = _resolve_config(args)
        except FileNotFoundError as e:
            print(f"Error: Config not found - {e}", file=sys.stderr)
            return EXIT_CONFIG_ERROR
        except json.JSONDecodeError as e:
            print(f"Error: Invalid config JSON - {e}", file=sys.stderr)
            return EXIT_CONFIG_ERROR
        except ValueError as e:
            print(f"Error: Invalid configuration - {e}", file=sys.stderr)
            return EXIT_CONFIG_ERROR
        return action(cfg)
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return EXIT_DECODE_ERROR
    except WavDecodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_DECODE_ERROR
    except OSError as e:
        print(f"Error: Cannot read input - {e}", file=sys.stderr)
        return EXIT_DECODE_ERROR
    except InvalidLengthError as e:
        print(f"Internal error: {e}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR
    except Exception as e:
        print(f"Internal error: {e}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR


def cmd_analyze(args) -> int:
    """Handle analyze command."""
    def action(cfg: AnalysisConfig) -> int:
        _, spectrum = analyze_wav(args.audio_path, cfg)
        emit_spectrum(spectrum.real, spectrum.imag, sys.stdout)
        return EXIT_OK

    return _run_guarded(args, action)


def cmd_inspect(args) -> int:
    """Handle inspect command."""
    def action(cfg: AnalysisConfig) -> int:
        audio = load_wav(args.audio_path)
        h = audio.header
        blocks = segment(audio.samples.size, cfg.window_size)
        covered = sum(b.length for b in blocks)
        print(f"File: {args.audio_path}")
        print(f"Format: PCM ({h.format_type}), {h.bits_per_sample}-bit")
        print(f"Channels: {h.channel_count}")
        print(f"Sample rate: {h.sample_rate} Hz")
        print(f"Byte rate: {h.byte_rate}")
        print(f"Block align: {h.block_align}")
        print(f"Data size: {h.data_size} bytes")
        print(f"Frames: {audio.sample_count} ({h.duration:.3f} s)")
        print(f"Samples: {audio.samples.size}")
        print()
        print(f"Blocks (window_size={cfg.window_size}): {len(blocks)}")
        if blocks and blocks[-1].length != cfg.window_size:
            tail = blocks[-1]
            print(f"  tail block: [{tail.start}, {tail.stop}) length={tail.length}")
        print(f"  untransformed samples: {audio.samples.size - covered}")
        return EXIT_OK

    return _run_guarded(args, action)


def cmd_peaks(args) -> int:
    """Handle peaks command."""
    def action(cfg: AnalysisConfig) -> int:
        audio, spectrum = analyze_wav(args.audio_path, cfg)
        h = audio.header
        for p in block_peaks(spectrum, h.sample_rate, h.channel_count):
            print(
                f"[{p.block.start}, {p.block.stop}) bin={p.bin} "
                f"freq={p.freq_hz:.2f}Hz mag={p.magnitude:.4g}"
            )
        return EXIT_OK

    return _run_guarded(args, action)


def _add_analysis_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--window-size", "-w",
        type=int,
        default=None,
        help="Block length, a power of two (default: 1024)"
    )
    p.add_argument(
        "--config", "-c",
        help="Path to analysis config JSON"
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="wavspectrum",
        description="WavSpectrum - block-wise FFT of PCM WAV files"
    )
    parser.add_argument(
        "--version", action="version",
        version=f"wavspectrum {__version__}"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level written to stderr (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # analyze command
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Print the complex spectrum, one line per sample index"
    )
    analyze_parser.add_argument(
        "audio_path",
        help="Path to audio file (16-bit PCM WAV)"
    )
    _add_analysis_args(analyze_parser)
    analyze_parser.set_defaults(func=cmd_analyze)

    # inspect command
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show WAV header fields and the planned blocks"
    )
    inspect_parser.add_argument(
        "audio_path",
        help="Path to audio file (16-bit PCM WAV)"
    )
    _add_analysis_args(inspect_parser)
    inspect_parser.set_defaults(func=cmd_inspect)

    # peaks command
    peaks_parser = subparsers.add_parser(
        "peaks",
        help="Print the dominant bin of every block"
    )
    peaks_parser.add_argument(
        "audio_path",
        help="Path to audio file (16-bit PCM WAV)"
    )
    _add_analysis_args(peaks_parser)
    peaks_parser.set_defaults(func=cmd_peaks)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if hasattr(args, "func"):
        sys.exit(args.func(args))
    else:
        parser.print_help()
        sys.exit(EXIT_BAD_ARGS)


if __name__ == "__main__":
    main()
