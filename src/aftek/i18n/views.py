"""Language selection endpoint."""

import json
import logging

from django.http import JsonResponse
from django.views import View

from .catalog import change_language, get_request_language

logger = logging.getLogger(__name__)


class LanguageView(View):
    """Read or change the session language.

    GET  /i18n/language/          -> {"language": "zh-Hant"}
    POST /i18n/language/ {"language": "en"}
    """

    def get(self, request):
        return JsonResponse({"language": get_request_language(request).value})

    def post(self, request):
        try:
            data = json.loads(request.body or b"{}")
        except json.JSONDecodeError:
            return JsonResponse({"error": "Invalid JSON"}, status=400)
        if not isinstance(data, dict):
            return JsonResponse({"error": "Request body must be a JSON object"}, status=400)

        try:
            language = change_language(request, data.get("language"))
        except ValueError as e:
            return JsonResponse({"error": str(e)}, status=400)

        logger.debug("Session language changed to %s", language.value)
        return JsonResponse({"language": language.value})
