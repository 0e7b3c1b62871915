from typing import Iterable, List

from catalog_etl.models import Lecturer


def normalize_lecturers(names: Iterable[str]) -> List[Lecturer]:
    """Split comma-separated lecturer lists into unique, trimmed names."""
    seen = {}
    for value in names:
        for name in value.split(","):
            name = name.strip()
            if name:
                seen[name] = None
    # dict keeps first-seen order
    return [Lecturer(name=name) for name in seen]
