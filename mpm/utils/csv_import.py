"""
Import of task data from CSV files.

Expected columns::

    name,duration,predecessors

where ``predecessors`` holds the names of the preceding tasks separated by
``;`` (or another separator) and may be left empty.
"""

import csv
import io
import logging

from ..domain.errors import TaskImportError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "duration")


def parse_csv_tasks(csv_data, delimiter=",", separator=";"):
    """
    Parse CSV task data into the three aligned sequences a TaskNetwork takes.

    Args:
        csv_data: CSV content as a string or an open text file
        delimiter: Field delimiter
        separator: Separator between predecessor names

    Returns:
        tuple: (task_names, durations, predecessor_lists)

    Raises:
        TaskImportError: If a required column is missing or a duration is
            not an integer
    """
    if isinstance(csv_data, str):
        csv_data = io.StringIO(csv_data)

    reader = csv.DictReader(csv_data, delimiter=delimiter)
    fieldnames = [field.strip() for field in (reader.fieldnames or [])]
    missing = [field for field in REQUIRED_FIELDS if field not in fieldnames]
    if missing:
        raise TaskImportError(f"CSV is missing required column(s): {', '.join(missing)}")
    reader.fieldnames = fieldnames

    names, durations, predecessors = [], [], []
    # Row 1 is the header
    for row_number, row in enumerate(reader, start=2):
        name = (row.get("name") or "").strip()
        if not name:
            raise TaskImportError(f"Row {row_number}: task name is empty")

        raw_duration = (row.get("duration") or "").strip()
        try:
            duration = int(raw_duration)
        except ValueError:
            raise TaskImportError(
                f"Row {row_number}: duration {raw_duration!r} of task {name} is not an integer"
            ) from None

        raw_predecessors = row.get("predecessors") or ""
        preds = [pred.strip() for pred in raw_predecessors.split(separator) if pred.strip()]

        names.append(name)
        durations.append(duration)
        predecessors.append(preds)

    logger.info("Imported %d tasks from CSV", len(names))
    return names, durations, predecessors


def load_tasks_csv(path, delimiter=",", separator=";"):
    """Read task data from the CSV file at ``path``. See ``parse_csv_tasks``."""
    with open(path, newline="", encoding="utf-8") as csv_file:
        return parse_csv_tasks(csv_file, delimiter=delimiter, separator=separator)
