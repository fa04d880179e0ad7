"""
HashiCorp Vault as an optional secret source.

AppRole login against a KV v2 mount. Every path is scoped under
'sellsite/', so the site can only read its own secrets. Each secret is
read once per process; fields are served from that copy afterwards.
"""

import logging
import os
from typing import Mapping

import hvac
from hvac.exceptions import Forbidden, InvalidPath, Unauthorized

logger = logging.getLogger(__name__)

SECRET_PREFIX = "sellsite"

_shared_client: "VaultClient | None" = None


class VaultError(Exception):
    """Vault is unreachable or refused the login."""


class VaultClient:
    """Authenticated KV v2 reader."""

    def __init__(
        self,
        vault_addr: str,
        role_id: str,
        secret_id: str,
        namespace: str | None = None,
    ):
        """
        Log in with AppRole.

        Raises:
            VaultError: If the login fails or the token is not accepted
        """
        kwargs = {"url": vault_addr}
        if namespace:
            kwargs["namespace"] = namespace
        self.client = hvac.Client(**kwargs)
        self._secrets: dict[str, dict[str, str]] = {}

        try:
            login = self.client.auth.approle.login(role_id=role_id, secret_id=secret_id)
            self.client.token = login["auth"]["client_token"]
        except (hvac.exceptions.VaultError, KeyError) as e:
            raise VaultError(f"AppRole login failed: {e}") from e

        if not self.client.is_authenticated():
            raise VaultError("Vault rejected the AppRole token")

        logger.info(f"Vault client authenticated against {vault_addr}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "VaultClient":
        """
        Build from VAULT_ADDR, VAULT_ROLE_ID, VAULT_SECRET_ID and VAULT_NAMESPACE.

        Raises:
            VaultError: If a required variable is missing
        """
        environ = os.environ if environ is None else environ
        addr = environ.get("VAULT_ADDR")
        role_id = environ.get("VAULT_ROLE_ID")
        secret_id = environ.get("VAULT_SECRET_ID")

        if not addr:
            raise VaultError("VAULT_ADDR is required")
        if not role_id or not secret_id:
            raise VaultError("VAULT_ROLE_ID and VAULT_SECRET_ID are required")

        return cls(addr, role_id, secret_id, namespace=environ.get("VAULT_NAMESPACE"))

    def read_secret(self, path: str) -> dict[str, str]:
        """
        All fields of sellsite/<path>.

        Raises:
            PermissionError: Path missing or not readable with this role
        """
        if path in self._secrets:
            return self._secrets[path]

        full_path = f"{SECRET_PREFIX}/{path}"
        try:
            response = self.client.secrets.kv.v2.read_secret_version(
                path=full_path, raise_on_deleted_version=True
            )
        except InvalidPath as e:
            raise PermissionError(f"Secret '{full_path}' not found in Vault") from e
        except (Unauthorized, Forbidden) as e:
            raise PermissionError(f"Access denied to secret '{full_path}'") from e

        data = response["data"]["data"]
        self._secrets[path] = data
        return data

    def get_secret(self, path: str, field: str) -> str:
        """
        One field of sellsite/<path>.

        Raises:
            PermissionError: Path missing or not readable
            KeyError: Field absent from the secret
        """
        data = self.read_secret(path)
        if field not in data:
            raise KeyError(
                f"Field '{field}' not in secret '{SECRET_PREFIX}/{path}' "
                f"(has: {', '.join(sorted(data))})"
            )
        return data[field]


def get_secret_value(path: str, field: str, environ: Mapping[str, str] | None = None) -> str:
    """Read a field through a process-wide client built from the environment."""
    global _shared_client
    if _shared_client is None:
        _shared_client = VaultClient.from_env(environ)
    return _shared_client.get_secret(path, field)
