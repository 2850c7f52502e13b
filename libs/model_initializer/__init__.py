"""Model initializer injection for workload pod templates.

Primary components:
- ``uri``: parsing of ``pvc://`` model source locators.
- ``volumes``: the volumes and mounts needed to provision a model.
- ``guard``: detection of an already injected init container.
- ``credentials``: the ``CredentialBuilder`` contract and its config map lookup.
- ``injector``: the orchestrator that mutates a deployment's pod spec.

Guidance:
- Construct a ``ModelInitializerInjector`` once per reconcile with an explicit
  ``InjectorConfig`` and credential builder, then call ``inject`` per workload.
"""
