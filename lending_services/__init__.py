"""
lending_services -- orchestration above the lending kernel.

Composes kernel coordinators and the configuration layer into the
``LendingDesk`` a front end talks to.
"""

from lending_services.lending_desk import LendingDesk, build_lending_desk

__all__ = ["LendingDesk", "build_lending_desk"]
