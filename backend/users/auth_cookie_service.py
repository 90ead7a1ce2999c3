from django.conf import settings
from rest_framework.response import Response


class AuthCookieService:
    """
    Cookie handling for staff sessions, shared by login and logout views.
    """

    @staticmethod
    def get_cookie_settings() -> dict:
        return {
            'secure': getattr(settings, 'SESSION_COOKIE_SECURE', not settings.DEBUG),
            'samesite': getattr(settings, 'SESSION_COOKIE_SAMESITE', 'Lax'),
            'httponly': True,
        }

    @staticmethod
    def set_auth_cookies(response: Response, access_token: str, refresh_token: str) -> Response:
        cookie_settings = AuthCookieService.get_cookie_settings()

        response.set_cookie(
            key=settings.SIMPLE_JWT["AUTH_COOKIE"],
            value=access_token,
            max_age=int(settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"].total_seconds()),
            path="/",
            **cookie_settings
        )
        response.set_cookie(
            key=settings.SIMPLE_JWT["AUTH_COOKIE_REFRESH"],
            value=refresh_token,
            max_age=int(settings.SIMPLE_JWT["REFRESH_TOKEN_LIFETIME"].total_seconds()),
            path="/",
            **cookie_settings
        )
        return response

    @staticmethod
    def clear_auth_cookies(response: Response) -> Response:
        samesite = getattr(settings, 'SESSION_COOKIE_SAMESITE', 'Lax')
        for cookie_name in (settings.SIMPLE_JWT["AUTH_COOKIE"], settings.SIMPLE_JWT["AUTH_COOKIE_REFRESH"]):
            response.delete_cookie(cookie_name, path="/", samesite=samesite)
        return response
