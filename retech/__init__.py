"""ReTech storefront."""
