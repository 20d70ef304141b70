"""Probe settings collected from command-line flags."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field

from core.errors import ConfigurationError
from core.logging import log_warning
from core.models import MAX_NODES, MIN_NODES, Thresholds

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3306
DEFAULT_NODES_WARN = 2
DEFAULT_NODES_CRIT = 1
DEFAULT_CONNECT_TIMEOUT_S = 10


@dataclass(frozen=True)
class ProbeSettings:
    """Connection details and thresholds for one probe run."""

    user: str = ""
    password: str = field(default="", repr=False)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    nodes_warn: int = DEFAULT_NODES_WARN
    nodes_crit: int = DEFAULT_NODES_CRIT
    connect_timeout_s: int = DEFAULT_CONNECT_TIMEOUT_S

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> "ProbeSettings":
        return cls(
            user=args.user or "",
            password=args.password or "",
            host=args.host,
            port=args.port,
            nodes_warn=args.nodes_warn,
            nodes_crit=args.nodes_crit,
            connect_timeout_s=args.connect_timeout,
        )

    @property
    def thresholds(self) -> Thresholds:
        return Thresholds(warn_floor=self.nodes_warn, crit_floor=self.nodes_crit)

    def validate(self) -> None:
        """Reject settings that must stop the probe before it connects.

        Raises:
            ConfigurationError: With the message to print for the scheduler.
        """

        if not self.user:
            raise ConfigurationError("Error: Username not provided!")
        if not self.password:
            raise ConfigurationError("Error: Password not provided!")
        out_of_range = self.thresholds.out_of_range()
        if out_of_range:
            raise ConfigurationError(
                "Number Galera Cluster nodes is out of expected range "
                f"({MIN_NODES}...{MAX_NODES}): {out_of_range[0]}"
            )
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"Error: Port out of range: {self.port}")
        if self.connect_timeout_s <= 0:
            raise ConfigurationError(
                f"Error: Connect timeout must be positive: {self.connect_timeout_s}"
            )
        if self.thresholds.crit_shadowed:
            log_warning(
                f"--nodes-crit={self.nodes_crit} is above --nodes-warn={self.nodes_warn}; "
                "cluster sizes at or below the warn floor will report Warning, not Critical"
            )
