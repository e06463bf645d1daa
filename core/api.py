"""
Base view and helpers for the JSON endpoints.

Every endpoint answers with JSON, including failures: ``{"error": message}``
and, for invalid input, a ``details`` mapping of field names to messages.
"""

import json
import logging

from django.core.exceptions import BadRequest, ValidationError
from django.http import JsonResponse
from django.views import View

from .exceptions import AccessDenied, NotConfigured

logger = logging.getLogger(__name__)


def json_error(message, status, details=None):
    payload = {'error': message}
    if details:
        payload['details'] = details
    return JsonResponse(payload, status=status)


class ApiView(View):
    """JSON endpoint with authentication checks and error translation.

    Services raise ``AccessDenied``, ``NotConfigured`` or ``ValidationError``;
    anything else is logged and reported as a generic 500.
    """

    login_required = True
    staff_required = False

    def dispatch(self, request, *args, **kwargs):
        if (self.login_required or self.staff_required) and not request.user.is_authenticated:
            return json_error('Authentication required', 401)
        if self.staff_required and not request.user.is_staff:
            return json_error('Admin access required', 403)

        try:
            return super().dispatch(request, *args, **kwargs)
        except (AccessDenied, NotConfigured) as e:
            return json_error(e.message, 404)
        except ValidationError as e:
            if hasattr(e, 'error_dict'):
                return json_error('Invalid data', 400, details=e.message_dict)
            return json_error('; '.join(e.messages), 400)
        except BadRequest as e:
            return json_error(str(e) or 'Bad request', 400)
        except Exception:
            logger.exception(
                "Unhandled error in %s %s", request.method, request.get_full_path()
            )
            return json_error('Internal server error', 500)

    def http_method_not_allowed(self, request, *args, **kwargs):
        response = json_error('Method not allowed', 405)
        response['Allow'] = ', '.join(self._allowed_methods())
        return response

    def get_json(self):
        """Decode the request body; it must be a JSON object."""
        if not self.request.body:
            return {}
        try:
            data = json.loads(self.request.body)
        except (TypeError, ValueError):
            raise BadRequest('Invalid JSON body')
        if not isinstance(data, dict):
            raise BadRequest('JSON body must be an object')
        return data

    def validate(self, form_class, data, **kwargs):
        """Bind and validate a form, raising ValidationError when invalid."""
        form = form_class(data, **kwargs)
        if not form.is_valid():
            raise ValidationError(form.errors.as_data())
        return form
