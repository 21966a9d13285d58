"""Blocking single-shot HTTP download of the function runtime.

No retries and no partial resume: any failure is reported as `FetchError` and the
destination is left in an undefined state for the caller to discard.
"""

from __future__ import annotations

from pathlib import Path

import httpx

from jvm_function_buildpack.errors import FetchError
from jvm_function_buildpack.logging import get_logger


def download(url: str, dest: Path, *, client: httpx.Client | None = None) -> None:
    """GET *url* and stream the response body into *dest*, overwriting it.

    Parameters
    ----------
    url: str
        Remote resource. Redirects are followed.
    dest: Path
        Target file; parent directories are created.
    client: httpx.Client | None
        Client to use. A fresh client without timeouts is created when omitted.
    """
    owned = client is None
    if client is None:
        client = httpx.Client(timeout=None, follow_redirects=True)
    try:
        with client.stream("GET", url) as r:
            r.raise_for_status()
            dest.parent.mkdir(parents=True, exist_ok=True)
            with open(dest, "wb") as out:
                for chunk in r.iter_bytes():
                    out.write(chunk)
        get_logger().debug("downloaded %s -> %s (%d bytes)", url, dest, dest.stat().st_size)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(f"GET {url} failed: {exc}") from exc
    except OSError as exc:
        raise FetchError(f"Could not write {dest}: {exc}") from exc
    finally:
        if owned:
            client.close()
