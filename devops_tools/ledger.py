from collections import OrderedDict
from typing import Iterator, List, Optional, Tuple

from devops_tools.constants import ERROR, REMOVED, WARNING


class RunLedger:
    """
    Outcomes of one run, keyed by tool name.

    An outcome is the version string seen after install/update, or the
    "Removed" marker. Writing the same tool twice keeps the first position but
    the last value. Warnings and errors that produced no outcome are kept as
    notices so the summary can list them.
    """

    def __init__(self):
        self._entries: "OrderedDict[str, str]" = OrderedDict()
        self._notices: List[Tuple[str, str]] = []

    def record(self, tool: str, outcome: str) -> None:
        self._entries[tool] = outcome

    def note(self, level: str, message: str) -> None:
        self._notices.append((level, message))

    def get(self, tool: str) -> Optional[str]:
        return self._entries.get(tool)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._entries.items())

    def is_removed(self, tool: str) -> bool:
        return self._entries.get(tool) == REMOVED

    @property
    def notices(self) -> List[Tuple[str, str]]:
        return list(self._notices)

    @property
    def warnings(self) -> List[str]:
        return [message for level, message in self._notices if level == WARNING]

    @property
    def errors(self) -> List[str]:
        return [message for level, message in self._notices if level == ERROR]

    def __contains__(self, tool: str) -> bool:
        return tool in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
