"""Dockerfile configuration produced from ranked files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

_FIELDS = (
    "base_image",
    "workdir",
    "files_to_copy",
    "build_commands",
    "env_vars",
    "expose_ports",
    "cmd",
    "dockerfile_content",
)


def _string_list(data: dict[str, Any], name: str) -> list[str]:
    items = data[name]
    if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
        raise ValueError(f"field `{name}` must be a list of strings")
    return list(items)


def _string(data: dict[str, Any], name: str) -> str:
    value = data[name]
    if not isinstance(value, str):
        raise ValueError(f"field `{name}` must be a string")
    return value


@dataclass
class DockerfileConfig:
    """Parts of a Dockerfile plus its complete rendered content."""

    base_image: str = ""
    workdir: str = ""
    files_to_copy: list[str] = field(default_factory=list)
    build_commands: list[str] = field(default_factory=list)
    env_vars: list[tuple[str, str]] = field(default_factory=list)
    expose_ports: list[int] = field(default_factory=list)
    cmd: list[str] = field(default_factory=list)
    dockerfile_content: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form; environment pairs become two-item lists."""
        return {
            "base_image": self.base_image,
            "workdir": self.workdir,
            "files_to_copy": list(self.files_to_copy),
            "build_commands": list(self.build_commands),
            "env_vars": [[key, value] for key, value in self.env_vars],
            "expose_ports": list(self.expose_ports),
            "cmd": list(self.cmd),
            "dockerfile_content": self.dockerfile_content,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DockerfileConfig:
        """Build a configuration from its JSON object form."""
        if not isinstance(data, dict):
            raise ValueError("dockerfile config must be a JSON object")
        missing = [name for name in _FIELDS if name not in data]
        if missing:
            raise ValueError(f"missing field `{missing[0]}`")

        env_vars = []
        for pair in data["env_vars"] if isinstance(data["env_vars"], list) else [None]:
            if (
                not isinstance(pair, (list, tuple))
                or len(pair) != 2
                or not all(isinstance(part, str) for part in pair)
            ):
                raise ValueError("field `env_vars` must hold [name, value] string pairs")
            env_vars.append((pair[0], pair[1]))

        ports = data["expose_ports"]
        if not isinstance(ports, list):
            raise ValueError("field `expose_ports` must be a list")
        for port in ports:
            if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 0xFFFF:
                raise ValueError(f"invalid port: {port!r}")

        return cls(
            base_image=_string(data, "base_image"),
            workdir=_string(data, "workdir"),
            files_to_copy=_string_list(data, "files_to_copy"),
            build_commands=_string_list(data, "build_commands"),
            env_vars=env_vars,
            expose_ports=list(ports),
            cmd=_string_list(data, "cmd"),
            dockerfile_content=_string(data, "dockerfile_content"),
        )