"""Script to fetch freight data once and save it as a snapshot file."""

import asyncio
import sys
from pathlib import Path
from typing import Optional

# Make the project importable when run from a checkout (scripts/ -> project root)
sys.path.insert(0, str(Path(__file__).parent.parent))

from freight_calc.config.env_loader import load_environment_variables
from freight_calc.core.dataset_loader import FreightDataLoader
from freight_calc.models.schema import TableSnapshot


def export_snapshot(output_path: Path, loader: Optional[FreightDataLoader] = None) -> TableSnapshot:
    """Fetch the reference tables from Google Sheets and write them to output_path.

    A configured SNAPSHOT_PATH is ignored so the export never re-saves an
    older snapshot file.
    """
    loader = loader or FreightDataLoader()
    snapshot = asyncio.run(loader.load_live())
    FreightDataLoader.save_to_json(snapshot, output_path)
    return snapshot


def main():
    """Fetch the reference tables and write them to disk."""
    print("=" * 60)
    print("Freight Data Snapshot Export")
    print("=" * 60)
    print()

    load_environment_variables()

    project_root = Path(__file__).parent.parent
    output_path = Path(sys.argv[1]) if len(sys.argv) > 1 else project_root / "data" / "freight_snapshot.json"
    print(f"Output will be saved to: {output_path}")
    print()

    snapshot = export_snapshot(output_path)

    print("=" * 60)
    print("Export Complete!")
    print("=" * 60)
    print(f"Zone chart entries: {len(snapshot.zone_chart)}")
    print(f"Rate charts: {len(snapshot.rate_tables)}")
    print(f"FSC windows: {len(snapshot.fsc_schedule)}")
    print(f"Interior delivery charges: {len(snapshot.interior_delivery)}")
    for name, source in snapshot.sources.items():
        print(f"  {name}: {source.value}")
    print()
    print("Set SNAPSHOT_PATH to this file to load it without calling Google Sheets.")


if __name__ == "__main__":
    main()
