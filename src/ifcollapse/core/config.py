import dataclasses
import json
import os
import pathlib
import sys
import typing

from .logging import getLogger

logger = getLogger(__name__)


def _get_default_user_dir() -> pathlib.Path:
    """Where options and project files live unless told otherwise.

    ``%APPDATA%/ifcollapse`` on Windows, ``$XDG_CONFIG_HOME/ifcollapse``
    (or ``~/.config/ifcollapse``) elsewhere.
    """
    if sys.platform == "win32":
        root = os.environ.get("APPDATA")
        base = pathlib.Path(root) if root else pathlib.Path.home() / "AppData" / "Roaming"
    else:
        root = os.environ.get("XDG_CONFIG_HOME")
        base = pathlib.Path(root) if root else pathlib.Path.home() / ".config"
    return base / "ifcollapse"


DEFAULT_USER_DIR = _get_default_user_dir()


@dataclasses.dataclass(frozen=True, slots=True)
class ConfigConstants:
    OPTIONS_FILENAME: typing.ClassVar[str] = "options.json"

    @staticmethod
    def default_log_dir(user_dir: pathlib.Path | None = None) -> pathlib.Path:
        return (user_dir if user_dir is not None else DEFAULT_USER_DIR) / "logs"


@dataclasses.dataclass(slots=True)
class RuleConfiguration:
    """
    One entry of a project's ``lints`` list.

    ``name`` is a lint pass key or lint name, ``config`` holds per-pass
    options such as ``{"level": "deny"}``.

    >>> rule = RuleConfiguration(name="collapsibleif", is_activated=True)
    >>> rule.to_dict()
    {'name': 'collapsibleif', 'is_activated': True, 'config': {}}
    >>> data = {'name': 'collapsibleif', 'is_activated': False, 'config': {'level': 'deny'}}
    >>> RuleConfiguration.from_dict(data).is_activated
    False
    """

    name: str | None = None
    is_activated: bool = True
    config: dict[str, typing.Any] = dataclasses.field(default_factory=dict)

    def to_dict(self) -> dict[str, typing.Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, typing.Any]) -> "RuleConfiguration":
        return cls(**data)


@dataclasses.dataclass(slots=True, repr=False)
class ProjectConfiguration:
    """
    A project file: which lint passes run, and with what options.
    """

    path: pathlib.Path
    description: str = ""
    lints: list[RuleConfiguration] = dataclasses.field(default_factory=list)

    def __repr__(self) -> str:
        return f"ProjectConfiguration(path={self.path}, description={self.description}, lints={len(self.lints)})"

    def rule(self, name: str) -> RuleConfiguration | None:
        """Entry for the pass called *name*, compared case-insensitively."""
        wanted = name.lower()
        return next(
            (r for r in self.lints if r.name is not None and r.name.lower() == wanted),
            None,
        )

    @classmethod
    def from_file(cls, path: pathlib.Path | str) -> "ProjectConfiguration":
        """
        Read a project file.

        Errors are logged, then re-raised: ``FileNotFoundError`` for a
        missing file, ``json.JSONDecodeError`` for malformed content.
        """
        path = pathlib.Path(path)
        logger.info("Loading project configuration from %s", path)
        try:
            with path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
        except FileNotFoundError:
            logger.error("No project configuration at %s", path)
            raise
        except json.JSONDecodeError as e:
            logger.error("Malformed project configuration %s: %s", path, e)
            raise

        return cls(
            path=path,
            description=data.get("description", ""),
            lints=[RuleConfiguration.from_dict(entry) for entry in data.get("lints", [])],
        )

    def save(self) -> None:
        logger.info("Saving project configuration to %s", self.path)
        payload = {
            "description": self.description,
            "lints": [rule.to_dict() for rule in self.lints],
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as fp:
                json.dump(payload, fp, indent=2)
        except IOError as e:
            logger.error("Could not write project configuration %s: %s", self.path, e)


class LintConfiguration:
    """
    Global options (``options.json``), read and written like a dict.

    Recognised keys: ``project`` (project file, relative to the user
    directory unless absolute), ``log_dir`` and ``erase_logs_on_reload``.

    >>> import tempfile
    >>> temp_dir = tempfile.TemporaryDirectory()
    >>> config_path = pathlib.Path(temp_dir.name) / "options.json"
    >>> config_path.write_text('{"project": "strict.json"}')
    26
    >>> config = LintConfiguration(config_path)
    >>> config["project"]
    'strict.json'
    >>> config["log_dir"] = "/new/logs"
    >>> str(config.log_dir)
    '/new/logs'
    >>> config.save()
    >>> json.loads(config_path.read_text())['log_dir']
    '/new/logs'
    >>> temp_dir.cleanup()
    """

    def __init__(
        self,
        config_path: pathlib.Path | str | None = None,
        *,
        user_dir: pathlib.Path | str | None = None,
    ):
        """
        Args:
            config_path: Options file. Defaults to ``options.json`` inside
                *user_dir*.
            user_dir: Directory holding options and project files. Defaults
                to DEFAULT_USER_DIR.
        """
        self._user_dir = pathlib.Path(user_dir) if user_dir is not None else DEFAULT_USER_DIR
        if config_path is None:
            self.config_file = self._user_dir / ConfigConstants.OPTIONS_FILENAME
        else:
            self.config_file = pathlib.Path(config_path)
        self._options: dict[str, typing.Any] = {}
        self._load()

    def _load(self) -> None:
        """Read the options file; any failure leaves empty in-memory options."""
        try:
            with self.config_file.open("r", encoding="utf-8") as fp:
                self._options = json.load(fp)
        except FileNotFoundError:
            logger.debug("No options file at %s", self.config_file)
        except json.JSONDecodeError:
            logger.error("Malformed options file %s", self.config_file)
        else:
            logger.info("Loaded options from %s", self.config_file)
            return
        logger.warning("Falling back to default options")
        self._options = {}

    def save(self) -> None:
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            with self.config_file.open("w", encoding="utf-8") as fp:
                json.dump(self._options, fp, indent=2)
        except IOError as e:
            logger.error("Could not write options to %s: %s", self.config_file, e)
        else:
            logger.info("Options saved to %s", self.config_file)

    def load_project(self) -> ProjectConfiguration | None:
        """The project named by the ``project`` option.

        ``None`` when the option is unset or the file cannot be read.
        """
        name = self._options.get("project")
        if not name:
            return None
        path = pathlib.Path(name)
        if not path.is_absolute():
            path = self.config_dir / path
        try:
            return ProjectConfiguration.from_file(path)
        except (FileNotFoundError, json.JSONDecodeError):
            return None

    @property
    def config_dir(self) -> pathlib.Path:
        return self._user_dir

    @property
    def log_dir(self) -> pathlib.Path:
        """The ``log_dir`` option, set to ``<user dir>/logs`` on first access if missing."""
        if not self._options.get("log_dir"):
            self._options["log_dir"] = str(ConfigConstants.default_log_dir(self._user_dir))
        return pathlib.Path(self._options["log_dir"])

    def __getitem__(self, name: str) -> typing.Any:
        return self._options[name]

    def __setitem__(self, name: str, value: typing.Any) -> None:
        self._options[name] = value

    def get(self, name: str, default: typing.Any = None) -> typing.Any:
        return self._options.get(name, default)

    def set(self, name: str, value: typing.Any) -> None:
        self._options[name] = value
