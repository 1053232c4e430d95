"""Service layer.

Business operations live in per-aggregate subpackages and are imported from
there directly, which keeps this package free of import-time side effects:

- :mod:`motomarket.services.accounts`: :class:`AccountService`
  (sign-up, sign-in, profile read/update, user listing).
- :mod:`motomarket.services.listings`: :class:`ListingService`
  (owner-scoped motorcycle listings).
- :mod:`motomarket.services._shared`: base service, identity, errors, ports.
"""
