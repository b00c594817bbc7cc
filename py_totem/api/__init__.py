"""HTTP surface for totem icon rendering."""
