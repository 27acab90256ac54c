"""
Job configuration.

Values are resolved from defaults, then the environment, then Hadoop-style
``key=value`` properties, then explicit overrides (CLI flags).
"""

import os
import uuid
import dataclasses
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from distwordcount.common.errors import ConfigError

# Property key used by the original Hadoop job
CASE_SENSITIVE_PROPERTY = "wordcount.case.sensitive"

EXECUTOR_KINDS = ("thread", "process")

# Environment variable -> JobConfig field
ENV_VARS = {
    "WORDCOUNT_CASE_SENSITIVE": "case_sensitive",
    "WORDCOUNT_NUM_PARTITIONS": "num_partitions",
    "WORDCOUNT_USE_COMBINER": "use_combiner",
    "WORDCOUNT_MAX_WORKERS": "max_workers",
    "WORDCOUNT_EXECUTOR": "executor",
    "WORDCOUNT_STATUS_INTERVAL": "status_interval",
}

# Property key -> JobConfig field
PROPERTIES = {
    CASE_SENSITIVE_PROPERTY: "case_sensitive",
    "wordcount.num.partitions": "num_partitions",
    "wordcount.use.combiner": "use_combiner",
    "wordcount.max.workers": "max_workers",
    "wordcount.executor": "executor",
    "wordcount.status.interval": "status_interval",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def parse_bool(value) -> bool:
    """Parse a boolean flag from a string such as 'true' or '0'"""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Not a boolean value: {value!r}")


def parse_int(value, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}")


@dataclass(frozen=True)
class JobConfig:
    """Options for a single word count job"""
    case_sensitive: bool = True
    num_partitions: int = 4
    use_combiner: bool = True
    max_workers: int = 4
    executor: str = "thread"
    status_interval: int = 100
    job_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self):
        self.validate()

    def validate(self):
        """
        Check option values

        Raises:
            ConfigError: If any option is out of range
        """
        if self.num_partitions < 1:
            raise ConfigError(f"num_partitions must be >= 1, got {self.num_partitions}")
        if self.max_workers < 1:
            raise ConfigError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.status_interval < 1:
            raise ConfigError(f"status_interval must be >= 1, got {self.status_interval}")
        if self.executor not in EXECUTOR_KINDS:
            raise ConfigError(
                f"executor must be one of {', '.join(EXECUTOR_KINDS)}, got {self.executor!r}"
            )

    def replace(self, **overrides) -> "JobConfig":
        """Return a copy with the given fields replaced; None values are ignored"""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes)

    def with_properties(self, properties: Mapping[str, str]) -> "JobConfig":
        """
        Apply Hadoop-style properties such as ``wordcount.case.sensitive=false``

        Args:
            properties: Mapping of property key to string value

        Returns:
            New JobConfig with the recognized properties applied

        Raises:
            ConfigError: On unknown keys or malformed values
        """
        changes = {}
        for key, value in properties.items():
            if key not in PROPERTIES:
                raise ConfigError(f"Unknown property: {key}")
            name = PROPERTIES[key]
            changes[name] = _coerce(name, value)
        return self.replace(**changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "JobConfig":
        """Build a config from WORDCOUNT_* environment variables plus overrides"""
        environ = os.environ if environ is None else environ
        values: Dict[str, object] = {}
        for var, name in ENV_VARS.items():
            if var in environ and environ[var] != "":
                values[name] = _coerce(name, environ[var])
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _coerce(name: str, value):
    if name in ("case_sensitive", "use_combiner"):
        return parse_bool(value)
    if name in ("num_partitions", "max_workers", "status_interval"):
        return parse_int(value, name)
    return str(value).strip().lower()


def parse_properties(pairs) -> Dict[str, str]:
    """
    Parse ``key=value`` strings (as given with -D on the command line)

    Raises:
        ConfigError: If an entry has no '='
    """
    properties = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ConfigError(f"Expected key=value, got {pair!r}")
        key, value = pair.split("=", 1)
        properties[key.strip()] = value.strip()
    return properties
