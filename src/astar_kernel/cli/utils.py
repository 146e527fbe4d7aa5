"""CLI utility functions."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Hydra is chatty at INFO
    logging.getLogger('hydra').setLevel(max(level, logging.WARNING))


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)

    # Ensure output directory exists
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Convert numpy values to plain Python for JSON serialization
    def convert_numpy(obj):
        if hasattr(obj, 'tolist'):
            return obj.tolist()
        elif isinstance(obj, dict):
            return {k: convert_numpy(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [convert_numpy(item) for item in obj]
        else:
            return obj

    serializable_results = convert_numpy(results)

    with open(output_path, 'w') as f:
        if pretty:
            json.dump(serializable_results, f, indent=2, sort_keys=True)
        else:
            json.dump(serializable_results, f)


def parse_position(text: str) -> Tuple[int, int]:
    """Parse ``"row,col"`` into a tuple.

    Raises:
        ValueError: If the text is not two comma-separated integers
    """
    parts = [p.strip() for p in text.split(',')]
    if len(parts) != 2:
        raise ValueError(f"Expected position as ROW,COL, got {text!r}")
    return int(parts[0]), int(parts[1])


def parse_tiles(text: str) -> List[int]:
    """Parse comma- or space-separated puzzle tiles.

    Raises:
        ValueError: If a tile is not an integer
    """
    tokens = text.replace(',', ' ').split()
    if not tokens:
        raise ValueError("No tiles given")
    return [int(t) for t in tokens]


def read_text_file(file_path: Union[str, Path]) -> str:
    """Read a text input file.

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {file_path}")
    return file_path.read_text()


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"


def print_summary(result: Dict[str, Any]) -> None:
    """Print a search result dictionary for humans.

    Args:
        result: Output of ``SearchResult.to_dict``
    """
    stats = result.get('statistics', {})
    print(f"Status: {result['status']} ({result['termination_reason']})")
    if result['success']:
        print(f"Cost:   {result['cost']}")
        print(f"Depth:  {result['depth']}")
        print("Path:   " + " -> ".join(str(s) for s in result['path']))
    else:
        print("No path found")
    print(f"Expanded {stats.get('nodes_expanded', 0)} states, "
          f"generated {stats.get('nodes_generated', 0)} entries "
          f"in {format_duration(result.get('computation_time', 0.0))}")
