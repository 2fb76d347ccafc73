"""Shared router for path guard endpoints."""

from __future__ import annotations

from fastapi import APIRouter

guard_router = APIRouter()
