from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api import copilot, fields
from config.constant import APP_TITLE
from infra.providers.base import ProviderConfigError

app = FastAPI(title=APP_TITLE)

app.include_router(fields.router, prefix="/v1")
app.include_router(copilot.router, prefix="/v1")


@app.exception_handler(ProviderConfigError)
async def provider_config_error_handler(request: Request, exc: ProviderConfigError):
    return JSONResponse(
        status_code=400,
        content={"code": exc.code, "params": {"message": exc.message}},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
