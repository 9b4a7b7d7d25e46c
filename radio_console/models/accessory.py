"""Modele Accessoire / Accessory model."""

from radio_console.models.base import Entity

ACCESSORIES = Entity(resource="accessories", family="accessories", order="created_at.desc")
