"""
Admin SSH key mapping.

Azure stores each key with the path it is written to; the username is
recovered from that path on read.

Dependencies: azure-mgmt-compute
System role: admin_ssh_key <-> linuxConfiguration.ssh.publicKeys
"""

import re
from typing import Any

from azure.mgmt.compute.models import SshConfiguration, SshPublicKey

from vmss.core.exceptions import FlattenError
from vmss.models.scale_set import AdminSSHKey

_AUTHORIZED_KEYS_PATH = re.compile(r"^/home/([^/]+)/\.ssh/authorized_keys$")


def authorized_keys_path(username: str) -> str:
    return f"/home/{username}/.ssh/authorized_keys"


def expand_ssh_keys(keys: list[AdminSSHKey]) -> list[SshPublicKey]:
    return [
        SshPublicKey(path=authorized_keys_path(key.username), key_data=key.public_key)
        for key in keys
    ]


def flatten_ssh_keys(ssh: SshConfiguration | None) -> list[dict[str, Any]]:
    """
    Flatten SSH public keys into admin_ssh_key state.

    Args:
        ssh: SSH configuration from the Linux OS profile

    Returns:
        list[dict]: public_key/username pairs

    Raises:
        FlattenError: If a key is stored outside /home/{username}/.ssh/authorized_keys
    """
    if ssh is None:
        return []

    keys = []
    for public_key in ssh.public_keys or []:
        path = public_key.path or ""
        match = _AUTHORIZED_KEYS_PATH.match(path)
        if match is None:
            raise FlattenError(
                "admin_ssh_key",
                f"Error parsing username from SSH key path {path!r}",
            )
        keys.append({"public_key": public_key.key_data, "username": match.group(1)})
    return keys
