"""Schemas for API requests and responses."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class HealthStatusSchema(Schema):
    status = fields.String(required=True)
    app = fields.String()


class RequestDescriptorSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    origin = fields.String(load_default="", allow_none=True)
    method = fields.String(load_default="GET", allow_none=True)
    with_credentials = fields.Boolean(load_default=False, data_key="withCredentials")
    request_headers = fields.String(load_default="", allow_none=True, data_key="requestHeaders")
    content_type = fields.String(load_default="", allow_none=True, data_key="contentType")


class ServerPolicySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    allow_origins = fields.String(load_default="", allow_none=True, data_key="allowOrigins")
    allow_methods = fields.String(load_default="", allow_none=True, data_key="allowMethods")
    allow_headers = fields.String(load_default="", allow_none=True, data_key="allowHeaders")
    allow_credentials = fields.Boolean(load_default=False, data_key="allowCredentials")


class EvaluationRequestSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    request = fields.Nested(RequestDescriptorSchema, load_default=dict)
    server = fields.Nested(ServerPolicySchema, load_default=dict)


class PreflightResultSchema(Schema):
    needed = fields.Boolean(required=True)
    allowed = fields.Boolean(required=True)


class ActualResultSchema(Schema):
    allowed = fields.Boolean(required=True)


class OutcomeSchema(Schema):
    needs_preflight = fields.Boolean(required=True, data_key="needsPreflight")
    preflight = fields.Nested(PreflightResultSchema, required=True)
    actual = fields.Nested(ActualResultSchema, required=True)
    is_origin_allowed = fields.Boolean(required=True, data_key="isOriginAllowed")
    response_headers = fields.Dict(
        keys=fields.String(), values=fields.String(), required=True, data_key="responseHeaders"
    )
    reasons = fields.List(fields.String(), required=True)


class ScenarioSchema(Schema):
    key = fields.String(required=True)
    title = fields.String(required=True)
    description = fields.String(required=True)
    request = fields.Nested(RequestDescriptorSchema, required=True)
    server = fields.Nested(ServerPolicySchema, required=True)
    outcome = fields.Nested(OutcomeSchema, required=True)


class ScenarioListSchema(Schema):
    scenarios = fields.List(fields.Nested(ScenarioSchema), required=True)


class ErrorMessageSchema(Schema):
    message = fields.String(required=True)
