"""
Command Line Interface Module

Parses command-line arguments for a digitizing run.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .constants import VALID_ROTATIONS


def parse_label(label_str: str) -> Tuple[int, str]:
    """
    Parse a --label value.

    Examples:
        "3=Sample A" -> (3, "Sample A")

    Args:
        label_str: "CURVE_ID=NAME"

    Returns:
        Tuple of (curve_id, name)

    Raises:
        argparse.ArgumentTypeError: If the value is malformed
    """
    if "=" not in label_str:
        raise argparse.ArgumentTypeError(f"Label must look like ID=NAME: {label_str!r}")

    curve_id, name = label_str.split("=", 1)
    try:
        curve_id = int(curve_id.strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"Curve id must be an integer: {label_str!r}")

    name = name.strip()
    if not name:
        raise argparse.ArgumentTypeError(f"Label name must not be empty: {label_str!r}")

    return curve_id, name


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the digitizer."""
    parser = argparse.ArgumentParser(
        prog="unplotter",
        description="Extract calibrated data from vector plots in PDF files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  unplotter -i figure.pdf --list-curves
  unplotter -i figure.pdf -o ./output --x-curve 0 --y-curve 1 \\
      --x-min 0 --x-max 10 --y-min 1 --y-max 1000 --y-log --label 4=Sample
  unplotter -i figure.pdf -o ./output --rotation 90 ... --format json
        """
    )

    # Required arguments
    parser.add_argument(
        "-i", "--input",
        required=True,
        help="Input PDF file path"
    )

    parser.add_argument(
        "-o", "--output",
        default=".",
        help="Output directory path (default: current directory)"
    )

    # Optional arguments
    parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="Page to digitize, 1-indexed (default: 1)"
    )

    parser.add_argument(
        "--rotation",
        type=int,
        default=0,
        help="View rotation in degrees clockwise: 0, 90, 180 or 270 (default: 0)"
    )

    parser.add_argument(
        "--list-curves",
        action="store_true",
        help="List the curves on the page with their ids and exit"
    )

    # Calibration options
    calib_group = parser.add_argument_group('axis calibration')

    calib_group.add_argument(
        "--x-curve",
        type=int,
        help="Curve id of the X-axis reference line"
    )

    calib_group.add_argument(
        "--y-curve",
        type=int,
        help="Curve id of the Y-axis reference line"
    )

    calib_group.add_argument("--x-min", type=float, help="Real value at the X-axis start")
    calib_group.add_argument("--x-max", type=float, help="Real value at the X-axis end")
    calib_group.add_argument("--y-min", type=float, help="Real value at the Y-axis start")
    calib_group.add_argument("--y-max", type=float, help="Real value at the Y-axis end")

    calib_group.add_argument(
        "--x-log",
        action="store_true",
        help="Use a logarithmic X-axis"
    )

    calib_group.add_argument(
        "--y-log",
        action="store_true",
        help="Use a logarithmic Y-axis"
    )

    # Output options
    output_group = parser.add_argument_group('output')

    output_group.add_argument(
        "--label",
        type=parse_label,
        action="append",
        metavar="ID=NAME",
        help="Label a data curve (repeatable). Without labels every "
             "non-axis curve is exported."
    )

    output_group.add_argument(
        "--format",
        choices=["csv", "json", "both"],
        help="Output format (default: from settings, csv and json)"
    )

    parser.add_argument(
        "--config",
        help="Settings YAML file (default: packaged settings.yaml)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    return parser


def validate_args(args: argparse.Namespace) -> Tuple[bool, str]:
    """
    Validate parsed arguments.

    Args:
        args: Parsed arguments

    Returns:
        Tuple of (is_valid, error_message)
    """
    # Check input file exists
    input_path = Path(args.input)
    if not input_path.exists():
        return False, f"Input file not found: {args.input}"

    if not input_path.suffix.lower() == ".pdf":
        return False, f"Input file must be a PDF: {args.input}"

    if args.page < 1:
        return False, f"Page must be 1 or greater: {args.page}"

    if args.rotation % 360 not in VALID_ROTATIONS:
        return False, f"Rotation must be one of {VALID_ROTATIONS}: {args.rotation}"

    if args.config and not Path(args.config).exists():
        return False, f"Settings file not found: {args.config}"

    if args.list_curves:
        return True, ""

    # Calibration inputs
    for name in ("x_curve", "y_curve", "x_min", "x_max", "y_min", "y_max"):
        if getattr(args, name) is None:
            flag = "--" + name.replace("_", "-")
            return False, f"{flag} is required (use --list-curves to find curve ids)"

    if args.x_log and (args.x_min <= 0 or args.x_max <= 0):
        return False, "Logarithmic X-axis needs positive --x-min and --x-max"

    if args.y_log and (args.y_min <= 0 or args.y_max <= 0):
        return False, "Logarithmic Y-axis needs positive --y-min and --y-max"

    # Check/create output directory
    output_path = Path(args.output)
    try:
        output_path.mkdir(parents=True, exist_ok=True)
    except Exception as e:
        return False, f"Cannot create output directory: {e}"

    return True, ""


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse and validate command-line arguments.

    Args:
        args: Optional list of arguments (uses sys.argv if None)

    Returns:
        Parsed and validated arguments
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    is_valid, error_msg = validate_args(parsed)
    if not is_valid:
        parser.error(error_msg)

    return parsed


def print_curve_list(curves: List[dict]) -> None:
    """Print describe_curve() entries as a table."""
    if not curves:
        print("No vector curves found on this page")
        return

    print(f"{'id':>5}  {'points':>6}  {'x range':>21}  {'y range':>21}")
    for info in curves:
        if info["points"]:
            x_range = f"{info['min_x']:9.2f} .. {info['max_x']:9.2f}"
            y_range = f"{info['min_y']:9.2f} .. {info['max_y']:9.2f}"
        else:
            x_range = y_range = "-"
        print(f"{info['curve_id']:>5}  {info['points']:>6}  {x_range:>21}  {y_range:>21}")


def main(argv: Optional[List[str]] = None):
    """Main entry point for CLI."""
    args = parse_args(argv)

    # Import pipeline and run
    from .pipeline import config_from_args, list_curves, run_digitize

    try:
        if args.list_curves:
            print_curve_list(list_curves(args.input, args.page))
        else:
            run_digitize(config_from_args(args))
    except KeyboardInterrupt:
        print("\nProcessing cancelled by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
