"""Pendulum host: canvas and frame-driven view."""
