from fastapi import Request

from buspass.config import Settings

def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with"""
    return request.app.state.settings
