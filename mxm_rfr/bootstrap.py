"""
Build runtime collaborators for mxm-rfr from its config.

This module turns the ``sources.eiopa.http`` config subtree into an
`HttpRequestsAdapter`. It performs **no implicit side effects on import**;
callers (scripts, notebooks, tests) invoke it explicitly once the config is
loaded.

Configuration
-------------
The HTTP adapter is configured under:

    sources:
      eiopa:
        http:
          user_agent: "mxm-rfr/0.1 (contact@moneyexmachina.com)"
          default_timeout: 30.0
          default_headers:
            Accept: "*/*"

Usage
-----
    from mxm_rfr.config.config import load_config
    from mxm_rfr.bootstrap import http_adapter_from_config

    cfg = load_config()
    with http_adapter_from_config(cfg) as adapter:
        index = get_release_index(adapter=adapter)
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from omegaconf import DictConfig

from mxm_rfr.common.http_adapter import DEFAULT_USER_AGENT, HttpRequestsAdapter
from mxm_rfr.config.config import eiopa_http_view


def _coerce_headers(m: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, str]]:
    if m is None:
        return None
    return {str(k): str(v) for k, v in m.items()}


def http_adapter_from_config(cfg: DictConfig) -> HttpRequestsAdapter:
    """Create an `HttpRequestsAdapter` from `sources.eiopa.http`."""
    http = eiopa_http_view(cfg, resolve=True)

    user_agent = str(http.get("user_agent", DEFAULT_USER_AGENT))
    default_timeout = float(http.get("default_timeout", 30.0))
    raw_headers = http.get("default_headers")
    headers = _coerce_headers(raw_headers if isinstance(raw_headers, Mapping) else None)

    return HttpRequestsAdapter(
        user_agent=user_agent,
        default_timeout=default_timeout,
        default_headers=headers,
    )
