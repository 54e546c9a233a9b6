from typing import Optional

from httpx import Response

REFRESH_COOKIE = "refreshToken"


def refresh_cookie(response: Response) -> Optional[str]:
    """Value of the refresh cookie set by a response, if any."""
    for header in response.headers.get_list("set-cookie"):
        name, _, rest = header.partition("=")
        if name.strip() == REFRESH_COOKIE:
            value = rest.split(";", 1)[0].strip().strip('"')
            return value or None
    return None


def cookie_header(refresh_token: str) -> dict:
    # The cookie is Secure and the test transport is plain http: send it by hand
    return {"Cookie": f"{REFRESH_COOKIE}={refresh_token}"}


def bearer(access_token: str) -> dict:
    return {"Authorization": f"Bearer {access_token}"}
