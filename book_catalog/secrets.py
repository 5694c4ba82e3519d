import httpx


def kv_data_url(addr: str, mount: str, path: str) -> str:
    """URL of a KV v2 secret's data endpoint."""
    return f"{addr.rstrip('/')}/v1/{mount.strip('/')}/data/{path.strip('/')}"


def fetch_vault_secret(*, addr: str, token: str, mount: str, path: str) -> dict[str, str]:
    with httpx.Client(timeout=5.0) as client:
        resp = client.get(kv_data_url(addr, mount, path), headers={"X-Vault-Token": token})
        resp.raise_for_status()
        body = resp.json()
    # KV v2 nests the stored values under data.data
    return (body.get("data") or {}).get("data") or {}
