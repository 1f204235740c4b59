import os
from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class Tenant:
    label: str
    root: str


def tenant_label(hostname: str) -> str:
    """
    First label of the hostname.

    "blog.example.com" -> "blog"
    "localhost" -> "localhost"
    """
    return hostname.split(".", 1)[0]


def resolve_tenant(
    hostname: str,
    *,
    public_root: str,
    apps_root: str,
    reserved: Iterable[str],
) -> Optional[Tenant]:
    """
    Map a hostname to the directory its content is served from.

    Reserved labels share the public root. Any other label resolves to
    its directory under the apps root, checked on every call so apps
    can be added or removed while the server runs. Returns None when
    no such directory exists.
    """
    label = tenant_label(hostname)

    if label in reserved:
        return Tenant(label=label, root=public_root)

    # "." and ".." would escape the apps root
    if not label or label in (".", "..") or os.sep in label:
        return None

    app_root = os.path.join(apps_root, label)
    if os.path.isdir(app_root):
        return Tenant(label=label, root=app_root)

    return None
