"""Interfaces (application boundary) for TALLY.

Defines framework-free application contracts: the ports the service layer
depends on (order repository, customer directory, ID generators, unit of work)
and the small DTOs and errors they exchange. Business rules stay out of this
package.

Dependency rule: this package may import `tally.domain` only. It may be
imported by `tally.service_layer`, `tally.adapters`, and `tally.bootstrap`.
"""
