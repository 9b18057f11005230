"""Schemas for API responses."""

from __future__ import annotations

from marshmallow import Schema, fields


class HealthStatusSchema(Schema):
    status = fields.String(required=True)
    app = fields.String()


class HealthScrapeSchema(Schema):
    status = fields.String(required=True)
    provider = fields.String(required=True)
    up = fields.Boolean(allow_none=True)
    total_scrapes = fields.Integer(required=True)
    currencies = fields.Integer(required=True)
    last_success_at = fields.String(allow_none=True)
    last_failure_at = fields.String(allow_none=True)
    last_error_kind = fields.String(allow_none=True)
