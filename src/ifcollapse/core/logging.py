import collections
import dataclasses
import functools
import logging
import logging.config
import pathlib
import shutil
import threading
import typing

LOG_FILENAME = "ifcollapse.log"

# Bumped whenever levels change; LevelFlag compares against it.
_levels_generation = collections.Counter(version=0)


@dataclasses.dataclass(slots=True)
class LevelFlag:
    """Truthy while logger ``_logger_name`` is enabled for ``_level``.

    The answer is cached until :meth:`bump_config_version` is called, so a
    lint pass can guard its per-node debug output with ``if logger.debug_on:``
    without asking the logging machinery every time.
    """

    _logger_name: str
    _level: int
    _last_version: int = dataclasses.field(default=-1, init=False)
    _cached: bool = dataclasses.field(default=False, init=False)

    def __bool__(self) -> bool:
        generation = self.get_config_version()
        if self._last_version != generation:
            self._cached = getLogger(self._logger_name).isEnabledFor(self._level)
            self._last_version = generation
        return self._cached

    def __repr__(self):
        return f"<LevelFlag {self._logger_name}>={logging.getLevelName(self._level)}>"

    @staticmethod
    def bump_config_version() -> None:
        _levels_generation["version"] += 1

    @staticmethod
    def get_config_version() -> int:
        return _levels_generation["version"]


class IfCollapseLogger(logging.Logger):
    """Logger carrying a per-thread mapped diagnostic context (MDC).

    The MDC holds the lint currently running (``lint``) and the file being
    checked (``file``); every record created by this logger gets those keys
    as attributes, so format strings can use ``%(lint)s``.
    """

    _mdc_local: "threading.local" = threading.local()

    @classmethod
    def mdc(cls) -> typing.Mapping[str, typing.Any]:
        current = getattr(cls._mdc_local, "mdc", None)
        if not current:
            current = {"lint": ""}
            cls.set_mdc(current)
        return current

    @classmethod
    def set_mdc(cls, d: dict[str, typing.Any]) -> None:
        cls._mdc_local.mdc = d

    @functools.cached_property
    def debug_on(self) -> LevelFlag:  # noqa: D401
        """Cached: is DEBUG enabled here?"""
        return LevelFlag(self.name, logging.DEBUG)

    @functools.cached_property
    def info_on(self) -> LevelFlag:  # noqa: D401
        return LevelFlag(self.name, logging.INFO)

    @classmethod
    def add_mdc(cls, key: str, value: typing.Any) -> None:
        cls.set_mdc({**cls.mdc(), key: value})

    @classmethod
    def get_mdc(cls, key: str, default: typing.Any | None = None):
        return cls.mdc().get(key, default)

    @classmethod
    def remove_mdc(cls, key: str) -> None:
        cls.set_mdc({k: v for k, v in cls.mdc().items() if k != key})

    @classmethod
    def clean_mdc(cls) -> None:
        """Forget everything stored for the current thread."""
        cls.set_mdc({})

    @classmethod
    def update_lint(cls, lint_name: str) -> None:
        cls.add_mdc("lint", lint_name)

    @classmethod
    def reset_lint(cls) -> None:
        cls.remove_mdc("lint")

    def makeRecord(
        self,
        name,
        level,
        fn,
        lno,
        msg,
        args,
        exc_info,
        func=None,
        extra: dict[str, typing.Any] | None = None,
        sinfo=None,
    ):
        merged = dict(self.mdc())
        if extra:
            merged.update(extra)
        return super().makeRecord(
            name, level, fn, lno, msg, args, exc_info, func=func, extra=merged, sinfo=sinfo
        )


class IfCollapseFormatter(logging.Formatter):
    """Renders the ``lint`` MDC key as `` - [name]``, or nothing when unset."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        lint = getattr(record, "lint", "")
        record.lint = f" - [{lint}]" if lint else ""
        return super().format(record)


# `configure_loggers` fills in the log file before handing this to dictConfig.
conf: dict[str, typing.Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "lintFormatter": {
            "()": IfCollapseFormatter,
            "format": "%(asctime)s - %(name)s - %(levelname)s%(lint)s - %(message)s",
        },
    },
    "handlers": {
        "consoleHandler": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "lintFormatter",
            "stream": "ext://sys.stderr",
        },
        "fileHandler": {
            "class": "logging.FileHandler",
            "level": "DEBUG",
            "formatter": "lintFormatter",
            "filename": None,
        },
    },
    "loggers": {
        "IfCollapse": {
            "level": "INFO",
            "handlers": ["consoleHandler", "fileHandler"],
            "propagate": False,
        },
        # pattern and pass internals only go to the file
        "IfCollapse.tree": {
            "level": "INFO",
            "handlers": ["fileHandler"],
            "propagate": False,
        },
        "IfCollapse.lints": {
            "level": "INFO",
            "handlers": ["fileHandler"],
            "propagate": False,
        },
        "IfCollapse.driver": {
            "level": "INFO",
            "handlers": ["consoleHandler", "fileHandler"],
            "propagate": False,
        },
    },
}


class LoggerConfigurator:
    """Query and change logger levels at runtime."""

    @staticmethod
    def available_loggers(
        prefix: str | typing.Iterable[str] | None = None,
        case_insensitive: bool = False,
    ) -> list[str]:
        """Return the sorted names of every known logger.

        Known means either created at runtime or declared in ``conf``.
        With *prefix* (one or several), keep only the names equal to a
        prefix or nested below it.
        """
        names = {
            name
            for name, obj in logging.Logger.manager.loggerDict.items()
            if isinstance(obj, logging.Logger)
        }
        names.update(conf["loggers"])
        if prefix is None:
            return sorted(names)

        prefixes = [prefix] if isinstance(prefix, str) else list(prefix)
        fold = str.lower if case_insensitive else (lambda s: s)
        prefixes = [fold(p) for p in prefixes]

        def wanted(name: str) -> bool:
            key = fold(name)
            return any(key == p or key.startswith(p + ".") for p in prefixes)

        return sorted(n for n in names if wanted(n))

    @staticmethod
    def get_level(name: str) -> int:
        return getLogger(name).getEffectiveLevel()

    @staticmethod
    def set_level(logger_name: str, level_name: str) -> None:
        """Set *logger_name* to DEBUG, INFO, WARNING, ERROR or CRITICAL."""
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level_name}")
        getLogger(logger_name, level).setLevel(level)
        LevelFlag.bump_config_version()


def clear_logs(log_dir: str | pathlib.Path) -> None:
    """Delete *log_dir* and everything in it."""
    shutil.rmtree(log_dir, ignore_errors=True)


def configure_loggers(log_dir: str | pathlib.Path) -> pathlib.Path:
    """Install ``conf``, logging to ``ifcollapse.log`` in *log_dir*.

    Returns the path of the log file.
    """
    log_dir = pathlib.Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME
    conf["handlers"]["fileHandler"]["filename"] = log_file.as_posix()
    logging.config.dictConfig(conf)
    LevelFlag.bump_config_version()
    return log_file


def getLogger(name: str, default_level: int = logging.INFO) -> IfCollapseLogger:
    """Return the :class:`IfCollapseLogger` registered under *name*.

    A plain logger that already exists under that name is replaced by an
    ``IfCollapseLogger`` with its handlers, filters and parent, so later
    lookups (through this function or ``logging.getLogger``) see the same
    object.

    >>> log = getLogger("IfCollapse.tree")
    >>> getLogger("IfCollapse.tree") is log
    True
    """
    base = logging.getLogger(name)
    if isinstance(base, IfCollapseLogger):
        return base
    level = base.level if base.level >= default_level else default_level
    wrapped = IfCollapseLogger(base.name, level=level)
    wrapped.handlers = list(base.handlers)
    wrapped.filters = list(base.filters)
    wrapped.disabled = base.disabled
    wrapped.parent = base.parent
    # a handler-less logger that does not propagate would drop every record
    wrapped.propagate = base.propagate or not wrapped.handlers
    logging.Logger.manager.loggerDict[name] = wrapped
    return wrapped
