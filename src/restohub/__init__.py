"""
restohub - governed restaurant data products.

Restaurants submit raw menus, occupancy readings and profiles; restohub
stages them, normalizes them into canonical records, packages those into
data products under an access policy, and lets spaces publish and consume
them with every decision written to an audit log.

Architecture::

    connectors/      menu, occupancy and restaurant connectors + registry
    repositories/    staging, canonical, products, published, audit
    pipeline/        normalization runner (staging → canonical)
    governance/      access policy evaluation
    products/        data product builder
    spaces/          space adapters + registry (publish / consume)
    core/            errors, results, logging, settings, storage, container
    ops/             operation functions (external interface)
    cli/             Typer command line
"""

__version__ = "0.1.0"
