import enum
import logging
from typing import Callable, Dict, Iterable, Optional

from devops_tools import constants as C
from devops_tools.backends import InstallerBackend
from devops_tools.catalog import expand_modules, get_module
from devops_tools.errors import InstallError, UnresolvedToolNameError
from devops_tools.ledger import RunLedger
from devops_tools.os_utils import is_tool_installed
from devops_tools.utils.name_resolver import resolve_or_raise
from devops_tools.version_checker import VersionProber

logger = logging.getLogger(__name__)

INFO = "info"

# report(status, message): status is one of info, success, warning, error
Reporter = Callable[[str, str], None]


class Action(str, enum.Enum):
    INSTALL = C.INSTALL
    UPDATE = C.UPDATE
    REMOVE = C.REMOVE


def _log_report(status: str, message: str) -> None:
    level = {C.ERROR: logging.ERROR, C.WARNING: logging.WARNING}.get(status, logging.INFO)
    logger.log(level, message)


def _result(status: str, message: str, tool: str, action: Action, outcome: Optional[str] = None, **extra) -> Dict:
    result = {
        "status": status,
        "message": message,
        "tool": tool,
        "action": action.value,
        "outcome": outcome,
    }
    result.update(extra)
    return result


class ActionDispatcher:
    """
    Applies one action to one catalog tool.

    Presence is checked on the host before anything else: install skips the
    backend for tools already on PATH, update and remove skip tools that are
    absent. Every path that reaches the backend writes exactly one ledger
    entry; skips write none.
    """

    def __init__(self, backend: InstallerBackend, prober: VersionProber,
                 is_installed: Optional[Callable[[str], bool]] = None,
                 report: Optional[Reporter] = None):
        self.backend = backend
        self.prober = prober
        self.is_installed = is_installed or is_tool_installed
        self.report = report or _log_report

    def dispatch(self, tool: str, action, ledger: RunLedger) -> Dict:
        action = Action(action)
        handler = {
            Action.INSTALL: self._install,
            Action.UPDATE: self._update,
            Action.REMOVE: self._remove,
        }[action]
        result = handler(tool, ledger)
        if result["status"] in (C.WARNING, C.ERROR):
            ledger.note(result["status"], result["message"])
        logger.info("%s %s -> %s (%s)", action.value, tool, result["status"], result["outcome"])
        self.report(result["status"], result["message"])
        return result

    def _install(self, tool: str, ledger: RunLedger) -> Dict:
        if self.is_installed(tool):
            version = self.prober.probe(tool)
            ledger.record(tool, version)
            return _result(C.SUCCESS, C.INSTALL_ALREADY.format(tool=tool, version=version),
                           tool, Action.INSTALL, version, already_installed=True)

        self.report(INFO, C.INSTALL_START.format(tool=tool))
        try:
            self.backend.install(tool)
        except InstallError as e:
            # The package manager may have got far enough to leave a usable binary
            outcome = self.prober.probe(tool) if self.is_installed(tool) else C.FAILED
            ledger.record(tool, outcome)
            return _result(C.ERROR, C.INSTALL_FAIL.format(tool=tool, error=e.underlying),
                           tool, Action.INSTALL, outcome)

        version = self.prober.probe(tool)
        ledger.record(tool, version)
        return _result(C.SUCCESS, C.INSTALL_SUCCESS.format(tool=tool, version=version),
                       tool, Action.INSTALL, version)

    def _update(self, tool: str, ledger: RunLedger) -> Dict:
        if not self.is_installed(tool):
            return _result(C.WARNING, C.UPDATE_SKIPPED.format(tool=tool), tool, Action.UPDATE, skipped=True)

        self.report(INFO, C.UPDATE_START.format(tool=tool))
        try:
            self.backend.update(tool)
        except InstallError as e:
            version = self.prober.probe(tool)
            ledger.record(tool, version)
            return _result(C.ERROR, C.UPDATE_FAIL.format(tool=tool, error=e.underlying),
                           tool, Action.UPDATE, version)

        version = self.prober.probe(tool)
        ledger.record(tool, version)
        return _result(C.SUCCESS, C.UPDATE_SUCCESS.format(tool=tool, version=version),
                       tool, Action.UPDATE, version)

    def _remove(self, tool: str, ledger: RunLedger) -> Dict:
        if not self.is_installed(tool):
            return _result(C.WARNING, C.REMOVE_SKIPPED.format(tool=tool), tool, Action.REMOVE, skipped=True)

        self.report(INFO, C.REMOVE_START.format(tool=tool))
        try:
            self.backend.remove(tool)
        except InstallError as e:
            outcome = self.prober.probe(tool) if self.is_installed(tool) else C.REMOVED
            ledger.record(tool, outcome)
            return _result(C.ERROR, C.REMOVE_FAIL.format(tool=tool, error=e.underlying),
                           tool, Action.REMOVE, outcome)

        ledger.record(tool, C.REMOVED)
        return _result(C.SUCCESS, C.REMOVE_SUCCESS.format(tool=tool), tool, Action.REMOVE, C.REMOVED)


def run_request(dispatcher: ActionDispatcher, action, modules: Iterable[str] = (),
                names: Iterable[str] = (), ledger: Optional[RunLedger] = None) -> RunLedger:
    """
    Process one CLI request sequentially.

    Requested modules are expanded first, in the order given, then every bare
    name is resolved against the catalog. An unknown name is reported with the
    closest suggestion and skipped; it never stops the run. Tools requested
    twice are simply dispatched twice.
    """
    action = Action(action)
    ledger = ledger if ledger is not None else RunLedger()
    report = dispatcher.report
    verb = action.value.capitalize()

    for name in modules:
        tools = expand_modules([name])
        module = get_module(name)
        report(INFO, C.MODULE_START.format(action=verb, title=module.title))
        for tool in tools:
            dispatcher.dispatch(tool, action, ledger)
        report(C.SUCCESS, C.MODULE_DONE.format(action=verb, title=module.title))

    for raw_name in names:
        try:
            tool = resolve_or_raise(raw_name)
        except UnresolvedToolNameError as e:
            if e.suggestion:
                hint = C.DID_YOU_MEAN.format(suggestion=e.suggestion)
            else:
                hint = C.NO_SUGGESTION.format(name=raw_name)
            ledger.note(C.ERROR, f"{e} {hint}")
            report(C.ERROR, str(e))
            report(C.WARNING, hint)
            continue
        if tool != raw_name:
            logger.info("Resolved '%s' to '%s'", raw_name, tool)
        dispatcher.dispatch(tool, action, ledger)

    return ledger
