import uvicorn

from app.core.config import settings

if __name__ == '__main__':
    host = "127.0.0.1"
    port = 8000

    print(f"Server running at: http://{host}:{port}")
    uvicorn.run("app.main:app", host=host, port=port, reload=settings.APP_ENV == "local")
