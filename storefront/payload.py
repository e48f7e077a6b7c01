# storefront/payload.py
from fastapi import HTTPException, Request


async def read_payload(request: Request) -> dict:
    """Тело запроса: JSON от fetch() или обычная HTML-форма."""
    if request.headers.get("content-type", "").startswith("application/json"):
        if not (await request.body()).strip():
            return {}
        try:
            data = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Malformed JSON body")
        if not isinstance(data, dict):
            raise HTTPException(status_code=400, detail="Expected a JSON object")
        return data
    form = await request.form()
    return dict(form)
