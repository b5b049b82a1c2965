"""SPDX element identifiers for graph nodes."""

SPDX_PACKAGE_PREFIX = "SPDXRef-Package-"


def to_spdx_id(identifier: str) -> str:
    """Map a package identifier to an SPDX element ID.

    The mapping is lossy (``a/b@1`` and ``a.b-1`` collide) and must stay
    exactly as is so that element IDs in previously issued documents keep
    matching.

    Args:
        identifier: Package identifier such as ``@scope/pkg@1.0.0``.

    Returns:
        str: e.g. ``SPDXRef-Package-scope.pkg-1.0.0``.
    """
    name = identifier
    # Strip leading @ for scoped packages
    if name.startswith("@"):
        name = name[1:]
    name = name.replace("/", ".")
    name = name.replace("@", "-")
    return f"{SPDX_PACKAGE_PREFIX}{name}"
