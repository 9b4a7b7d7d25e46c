"""Modeles Catalogue (merk > categorie > model) / Catalog models (brand > category > model)."""

from radio_console.models.base import Entity

BRANDS = Entity(resource="brands", family="brands", order="name.asc")

# brand_id obligatoire, pas de cascade cote store / brand_id required, no store-side cascade
CATEGORIES = Entity(resource="categories", family="categories", order="name.asc")

# category_id obligatoire / category_id required
MODELS = Entity(resource="models", family="models", order="name.asc")

# Jetons qui marquent une categorie "radio" / Tokens marking a "radio" category
RADIO_CATEGORY_TOKENS = ("radio", "portable", "mobile", "base")
