"""
Route registration.

The service depends on a small routing capability rather than on Flask
directly:

    register:  add_url_rule(rule, endpoint, view_func, **options)
    dispatch:  wsgi_app(environ, start_response)

A Flask application satisfies it as-is; tests can pass a double.
"""

from typing import Callable, Iterable, Protocol

from .echo import ECHO_METHODS, handle_echo


class Router(Protocol):
    wsgi_app: Callable[..., Iterable[bytes]]

    def add_url_rule(self, rule: str, endpoint=None, view_func=None, **options) -> None:
        ...


def register_routes(router: Router) -> None:
    router.add_url_rule(
        '/echo',
        endpoint='echo',
        view_func=handle_echo,
        methods=ECHO_METHODS,
        provide_automatic_options=False,
    )
