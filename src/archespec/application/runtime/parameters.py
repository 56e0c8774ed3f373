# src/archespec/application/runtime/parameters.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""Request parameters of an operation.

Purpose:
    Map raw request input to the parameters and the request body of an
    operation and wrap each value according to its schema.

Layer:
    application/runtime

Notes:
    - Header parameters are read from the request headers. A querystring
      parameter takes all query parameters. Any other parameter is taken
      from ``params`` by name.
    - If the request body schema selected by the media type of the request
      is an object, its properties are read from the params left over and
      merged into the attributes.
    - In strong mode any key that can't be mapped to a parameter or a
      request body property makes the parameters invalid.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from archespec.application.interfaces.request_source import RequestSource
from archespec.application.runtime.errors import BASE, Errors
from archespec.application.runtime.json_values import JsonObject, JsonValue, wrap_json
from archespec.application.runtime.model import Model, Nestable
from archespec.config.settings import get_settings
from archespec.domain.enums.parameter_location import ParameterLocation
from archespec.domain.meta.operation import OperationView
from archespec.domain.meta.schema.view import ObjectSchemaView

logger = logging.getLogger(__name__)

_REQUEST = "request"


class Parameters(Nestable):
    """Typed request parameters.

    Args:
        params: The raw request parameters, path, query and body merged.
        request: The request the parameters belong to.
        operation: The operation the parameters are mapped to.
        strong: Reject unmapped parameters. Defaults to the
            ``strong_parameters`` setting.
    """

    def __init__(
        self,
        params: Mapping[str, Any] | None,
        request: RequestSource,
        operation: OperationView,
        *,
        strong: bool | None = None,
    ) -> None:
        if strong is None:
            strong = get_settings().strong_parameters

        params = {str(key): value for key, value in (params or {}).items()}
        unassigned = dict(params)
        self._operation = operation
        self._params_to_be_validated: dict[str, Any] = dict(params) if strong else {}
        self._raw_attributes: dict[str, JsonValue] = {}

        for name, parameter in operation.parameters.items():
            location = parameter.location
            if location is ParameterLocation.HEADER:
                raw = request.headers.get(parameter.name)
            elif location is ParameterLocation.QUERYSTRING:
                query_parameters = dict(request.query_parameters)
                for key in query_parameters:
                    unassigned.pop(key, None)
                    self._params_to_be_validated.pop(key, None)
                if parameter.schema.type == "object":
                    raw = {key: params[key] for key in query_parameters if key in params}
                else:
                    raw = urlencode(query_parameters, doseq=True)
            else:
                raw = unassigned.pop(parameter.name, None)
            self._raw_attributes[name] = wrap_json(raw, parameter.schema, context=_REQUEST)

        self._raw_additional_attributes: dict[str, JsonValue] = {}
        request_body = operation.request_body
        content = None if request_body is None else request_body.content_for(request.media_type)
        if content is not None and isinstance(content.schema, ObjectSchemaView):
            body = JsonObject(unassigned, content.schema, context=_REQUEST)
            self._raw_attributes.update(body.raw_attributes)
            self._raw_additional_attributes = dict(body.raw_additional_attributes)
            for key in self._raw_additional_attributes:
                self._params_to_be_validated.pop(key, None)
        self._model: Model | None = None

    @property
    def raw_attributes(self) -> dict[str, JsonValue]:
        return self._raw_attributes

    @property
    def raw_additional_attributes(self) -> dict[str, JsonValue]:
        return self._raw_additional_attributes

    @property
    def model(self) -> Model:
        """The parameters wrapped by the operation's model, ``Model`` by default."""
        if self._model is None:
            model_class = self._operation.model or Model
            self._model = model_class(self)
        return self._model

    def validate(self, errors: Errors) -> bool:
        """Validate the parameters. Detected errors are added to ``errors``.

        Returns:
            True if the parameters are valid, False otherwise.
        """
        valid = self.validate_attributes(errors) and self._validate_parameters(
            self._params_to_be_validated, self.attributes, errors, ()
        )
        logger.debug(
            "archespec.parameters.validated",
            extra={"operation": self._operation.name, "valid": valid, "errors": errors.to_dict()},
        )
        return valid

    def _validate_parameters(
        self,
        params: Mapping[str, Any],
        attributes: Mapping[str, Any],
        errors: Errors,
        path: tuple[str, ...],
    ) -> bool:
        results = []
        for key, value in params.items():
            key = str(key)
            if key in attributes:
                nested = attributes[key]
                if isinstance(value, Mapping):
                    nested_attributes: dict[str, Any] = {}
                    if isinstance(nested, Model):
                        nested_attributes = {**nested.attributes, **nested.additional_attributes}
                    results.append(self._validate_parameters(value, nested_attributes, errors, (*path, key)))
                else:
                    results.append(True)
            else:
                name = ".".join((*path, key))
                logger.debug(
                    "archespec.parameters.forbidden",
                    extra={"operation": self._operation.name, "parameter": name},
                )
                errors.add(BASE, f"'{name}' isn't allowed")
                results.append(False)
        return all(results)

    def __repr__(self) -> str:
        return f"<Parameters {self.attributes!r}>"


__all__ = ["Parameters"]
