from typing import Optional

import httpx

from clabot.errors import FetchError


class SheetClient:
    """
    Fetches a published spreadsheet as CSV.
    Google's "publish to web" CSV links answer with a redirect, so redirects are followed.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport

    async def fetch_csv(self, url: str) -> str:
        try:
            async with httpx.AsyncClient(
                timeout=30, follow_redirects=True, transport=self.transport
            ) as client:
                r = await client.get(url)
        except httpx.HTTPError as e:
            raise FetchError(f"signer sheet request failed: {e}") from e

        if r.status_code != 200:
            raise FetchError(f"signer sheet returned {r.status_code} {r.reason_phrase}")
        return r.text
