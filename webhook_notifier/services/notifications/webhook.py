from __future__ import annotations

from contextlib import ExitStack
import json
import logging
from typing import Dict, List, Optional, Tuple

import requests
from urllib3.fields import RequestField
from urllib3.filepost import encode_multipart_formdata

from webhook_notifier.schemas.detection import DetectionEvent
from webhook_notifier.services.notifications.auth import build_authorization, format_authorization
from webhook_notifier.services.notifications.base import HttpMethod, NotificationTarget, NotifierBase

logger = logging.getLogger(__name__)

TYPES_FIELD = "types"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class WebhookNotifier(NotifierBase):
    """Calls a third party HTTP endpoint for each detection.

    DELETE and GET requests are bare. PATCH, POST and PUT requests carry a
    multipart/form-data body holding, depending on the target flags:
      - a `types` part: JSON array of the detected type names
      - an image part named by `target.field`, with the image filename

    The session is owned by the caller and shared between notifiers. It is
    never mutated; the Authorization header is passed with each request.
    """

    def __init__(
        self,
        target: NotificationTarget,
        session: requests.Session,
        timeout: float = 10.0,
    ) -> None:
        super().__init__(send_types=target.send_types)
        self._target = target
        self._session = session
        self._timeout = timeout

    @property
    def target(self) -> NotificationTarget:
        return self._target

    def send(self, event: DetectionEvent) -> None:
        prefix = f"{event.camera.name}: Webhook:"
        logger.info("%s Processing", prefix)

        method = HttpMethod.resolve(self._target.method)
        if method is None:
            logger.error("%s The method type '%s' is not supported.", prefix, self._target.method)
            return

        headers = self._headers()
        with ExitStack() as stack:
            body = None
            if method.has_body:
                body, content_type = self._build_form(event, stack)
                headers["Content-Type"] = content_type

            logger.info("%s Calling %s.", prefix, method.value)
            response = self._dispatch(method, headers, body)
        self._handle_response(response, prefix)

    def _headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        auth = build_authorization(
            self._target.authentication,
            username=self._target.username,
            password=self._target.password,
            token=self._target.token,
        )
        if auth is not None:
            headers["Authorization"] = format_authorization(auth)
        return headers

    def _build_form(self, event: DetectionEvent, stack: ExitStack) -> Tuple[bytes, str]:
        """Encode the multipart body. The image stream is registered on `stack`
        so it stays open until the request has completed."""
        fields: List[RequestField] = []

        if self.send_types:
            part = RequestField(name=TYPES_FIELD, data=json.dumps(list(event.found_types)))
            part.make_multipart(content_type=JSON_CONTENT_TYPE)
            fields.append(part)

        if self._target.send_image:
            stream = stack.enter_context(event.image.open_readonly())
            part = RequestField(name=self._target.field, data=stream.read(), filename=event.image.file_name)
            part.make_multipart()
            fields.append(part)

        return encode_multipart_formdata(fields)

    def _dispatch(self, method: HttpMethod, headers: Dict[str, str], body: Optional[bytes]) -> requests.Response:
        # Transport errors propagate to the caller.
        return self._session.request(
            method.value,
            self._target.url,
            headers=headers,
            data=body if method.has_body else None,
            timeout=self._timeout,
        )

    @staticmethod
    def _handle_response(response: requests.Response, prefix: str) -> None:
        if 200 <= response.status_code < 300:
            logger.info("%s Success.", prefix)
        else:
            logger.warning(
                "%s The end point responded with HTTP status code '%d'.", prefix, response.status_code
            )
