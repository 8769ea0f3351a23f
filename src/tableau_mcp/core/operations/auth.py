from __future__ import annotations

from typing import Optional

from tableau_mcp.core.client import TableauClient
from tableau_mcp.core.models import Credentials, SignInResponse, Site, User
from tableau_mcp.core.observability import log_event


def resolve_site_content_url(client: TableauClient, site: str) -> str:
    """The default site is addressed by an empty contentUrl on newer servers."""
    if client.omit_default_site_name and site == client.default_site_name:
        return ""
    return site


def sign_in(
    client: TableauClient,
    username: str,
    password: str,
    site: str = "",
    impersonate_user_id: Optional[str] = None,
) -> Credentials:
    """
    Sign in and keep the returned token on the client.

    The token is attached as X-Tableau-Auth on every later request. The
    signed-in site and user ids are kept as well so site-scoped calls can
    default to them.
    """
    credentials = Credentials(
        name=username,
        password=password,
        site=Site(content_url=resolve_site_content_url(client, site)),
    )
    if impersonate_user_id:
        credentials.user = User(id=impersonate_user_id)

    result: SignInResponse = client.post_xml(
        client.api_path("auth", "signin"),
        credentials,
        model=SignInResponse,
        trace_body=False,
        op="sign_in",
    )

    signed = result.credentials
    client.auth_token = signed.token
    client.site_id = signed.site.id if signed.site else None
    client.user_id = signed.user.id if signed.user else None

    log_event(
        "tableau.sign_in",
        site=site,
        site_id=client.site_id,
        user_id=client.user_id,
        impersonating=bool(impersonate_user_id),
    )
    return signed


def sign_out(client: TableauClient) -> None:
    """Invalidate the server session and drop the local token."""
    client.post(
        client.api_path("auth", "signout"),
        headers={"Content-Type": "application/xml"},
        op="sign_out",
    )
    site_id = client.site_id
    client.clear_session()
    log_event("tableau.sign_out", site_id=site_id)


__all__ = ["sign_in", "sign_out", "resolve_site_content_url"]
