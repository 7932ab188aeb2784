"""Entrypoints (inbound adapters) for TALLY.

Expose the application to the outside world. Today that is the administrative
`tally` CLI; order-facing controllers live with the applications that embed
the kernel and talk to it through `tally.bootstrap`.
"""
