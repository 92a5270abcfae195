"""
Cross-compilation target identifiers.

This module parses target triples such as 'x86_64-linux-gnu' or 'wasm32-wasi'
into structured descriptors. Parsing is a pure string transformation.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from zimkit.core.exceptions import InvalidIdentifier

DELIMITER = "-"

# Well-known targets shown by 'zim target list'
COMMON_TARGETS: Dict[str, str] = {
    "x86_64-linux-gnu": "Linux x86_64",
    "aarch64-linux-gnu": "Linux ARM64",
    "x86_64-windows-gnu": "Windows x86_64",
    "x86_64-macos": "macOS x86_64",
    "aarch64-macos": "macOS ARM64 (Apple Silicon)",
    "wasm32-wasi": "WebAssembly WASI",
    "wasm32-freestanding": "WebAssembly bare",
}


@dataclass(frozen=True)
class TargetDescriptor:
    """
    Parsed cross-compilation target.

    Attributes:
        identifier: The original identifier string
        architecture: CPU architecture (e.g., 'x86_64', 'aarch64', 'wasm32')
        operating_system: Target OS (e.g., 'linux', 'macos', 'wasi')
        abi: Optional ABI (e.g., 'gnu', 'musl'); None for two-part identifiers
    """

    identifier: str
    architecture: str
    operating_system: str
    abi: Optional[str] = None

    def __str__(self) -> str:
        return self.identifier


def parse_target(identifier: str) -> TargetDescriptor:
    """
    Parse a target identifier into a TargetDescriptor.

    The identifier is split on '-'. The first component is the architecture,
    the second the operating system and the third, if present, the ABI.
    Anything after the third component is ignored.

    Args:
        identifier: Target identifier (e.g., 'x86_64-linux-gnu')

    Returns:
        TargetDescriptor for the identifier

    Raises:
        InvalidIdentifier: If architecture or OS is missing or empty

    Example:
        >>> target = parse_target("x86_64-linux-gnu")
        >>> target.architecture, target.operating_system, target.abi
        ('x86_64', 'linux', 'gnu')
        >>> parse_target("wasm32-wasi").abi is None
        True
    """
    if not isinstance(identifier, str) or not identifier:
        raise InvalidIdentifier(str(identifier), "identifier is empty")

    components = identifier.split(DELIMITER)
    if len(components) < 2:
        raise InvalidIdentifier(
            identifier, "expected at least <arch>-<os>, e.g. x86_64-linux-gnu"
        )

    architecture, operating_system = components[0], components[1]
    if not architecture:
        raise InvalidIdentifier(identifier, "architecture is empty")
    if not operating_system:
        raise InvalidIdentifier(identifier, "operating system is empty")

    abi = components[2] if len(components) > 2 and components[2] else None

    return TargetDescriptor(
        identifier=identifier,
        architecture=architecture,
        operating_system=operating_system,
        abi=abi,
    )
