"""Export JSON schemas for the itinerary view models."""

import json
from pathlib import Path

from trip_planner.app.models import ActivityEntry, Day, ItineraryEntry
from trip_planner.app.services.views import ItineraryView


def main() -> None:
    """Export schemas to docs/schemas/."""
    schemas_dir = Path("docs/schemas")
    schemas_dir.mkdir(parents=True, exist_ok=True)

    for model in (ItineraryEntry, ActivityEntry, Day, ItineraryView):
        schema_path = schemas_dir / f"{model.__name__}.schema.json"
        with open(schema_path, "w") as f:
            json.dump(model.model_json_schema(), f, indent=2)
        print(f"Exported {model.__name__} schema to {schema_path}")


if __name__ == "__main__":
    main()
