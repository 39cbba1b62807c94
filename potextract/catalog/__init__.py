"""Message catalog: aggregation and POT serialization."""

from potextract.catalog.builder import CatalogBuilder
from potextract.catalog.serializer import build_po_file, save_pot_file, to_pot_string

__all__ = ["CatalogBuilder", "build_po_file", "save_pot_file", "to_pot_string"]
