# app/common/response.py

from fastapi.responses import JSONResponse


class ErrorResponse:
    @staticmethod
    def send(message="An error occurred", status_code=500, errors=None, error=None):
        response = {
            "success": False,
            "message": message,
            "status_code": status_code,
            "errors": errors if errors else []
        }
        if error:
            response["error"] = error
        return JSONResponse(content=response, status_code=status_code)
