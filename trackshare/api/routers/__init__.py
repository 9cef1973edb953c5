"""Aggregate API routers."""

from fastapi import APIRouter

from .tracks import router as tracks_router

ALL_ROUTERS: tuple[APIRouter, ...] = (tracks_router,)

__all__ = ["ALL_ROUTERS"]
