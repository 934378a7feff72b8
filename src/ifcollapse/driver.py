"""Driver adapter: runs the enabled lint passes over a tree.

The driver owns nothing of the analysis itself.  It decides which passes
run (from a :class:`ProjectConfiguration`), feeds every expression node of
a tree to them through a :class:`Matcher`, and forwards the diagnostics to
a sink.
"""
from __future__ import annotations

from ifcollapse.core import typing
from ifcollapse.core import (
    IfCollapseLogger,
    LintConfiguration,
    LintStatistics,
    ProjectConfiguration,
    clear_logs,
    configure_loggers,
    getLogger,
)
from ifcollapse.diagnostics import Diagnostic, DiagnosticCollector, DiagnosticSink
from ifcollapse.lints import Level, LintPass
from ifcollapse.source_map import SourceMap
from ifcollapse.tree.matcher import Matcher
from ifcollapse.tree.nodes import Node
from ifcollapse.tree.scheme import Scheme

logger = getLogger("IfCollapse.driver")


class LintDriver:
    """Runs every activated lint pass over trees handed to it."""

    def __init__(
        self,
        project: ProjectConfiguration | None = None,
        stats: LintStatistics | None = None,
    ) -> None:
        self.project = project
        self.stats = stats if stats is not None else LintStatistics()
        self.passes: list[LintPass] = self._instantiate_passes()
        logger.debug("Enabled lint passes: %s", [p.name for p in self.passes])

    @classmethod
    def from_configuration(
        cls,
        config: LintConfiguration,
        stats: LintStatistics | None = None,
    ) -> "LintDriver":
        """Set up logging under ``config.log_dir`` and load the configured project.

        With the ``erase_logs_on_reload`` option set, the log directory is
        wiped first.
        """
        if config.get("erase_logs_on_reload"):
            clear_logs(config.log_dir)
        log_file = configure_loggers(config.log_dir)
        logger.info("Logging to %s", log_file)
        project = config.load_project()
        if project is None:
            logger.info("No project configured, running every lint at its default level")
        return cls(project, stats)

    def _instantiate_passes(self) -> list[LintPass]:
        passes: list[LintPass] = []
        for pass_cls in LintPass.all():
            level: Level | None = None
            rule = None
            if self.project is not None:
                rule = self.project.rule(LintPass.keyof(pass_cls)) or self.project.rule(
                    pass_cls.lint.name
                )
            if rule is not None:
                if not rule.is_activated:
                    logger.info("Lint pass %s is deactivated", pass_cls.lint.name)
                    continue
                if "level" in rule.config:
                    level = Level.parse(rule.config["level"])
            if (level or pass_cls.lint.level) is Level.ALLOW:
                continue
            passes.append(pass_cls(level=level, stats=self.stats))
        return passes

    def _on_pass_error(self, scheme: Scheme, item: typing.Any, exc: Exception) -> None:
        name = getattr(scheme, "name", type(scheme).__name__)
        logger.warning("Lint pass %s failed on %r: %s", name, item, exc)
        self.stats.record_failure(name)

    def check_tree(
        self,
        root: Node,
        source_map: SourceMap,
        sink: DiagnosticSink | None = None,
    ) -> list[Diagnostic]:
        """Lint the tree under *root*; return the diagnostics, also sent to *sink*."""
        if sink is None:
            sink = DiagnosticCollector()
        matcher = Matcher(
            *self.passes,
            result_type=Diagnostic,
            on_scheme_error=self._on_pass_error,
        )
        IfCollapseLogger.add_mdc("file", source_map.filename)
        try:
            diagnostics = matcher.match_tree(root, source_map)
        finally:
            IfCollapseLogger.remove_mdc("file")
            IfCollapseLogger.reset_lint()

        for diagnostic in diagnostics:
            self.stats.record_diagnostic(diagnostic.lint.name)
            sink.emit(diagnostic)
        logger.debug(
            "%s: %d diagnostics from %d passes",
            source_map.filename,
            len(diagnostics),
            len(self.passes),
        )
        return diagnostics
