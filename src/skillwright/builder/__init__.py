"""skillwright builder - the implement → test → revise loop.

Core Components:
- Config: budgets, artifact settings, planner keywords, implementer choice
- Runner: executes a skill's test scaffold and parses its trace
- Loop Controller: sequences the phases with a bounded attempt budget
- Journal: append-only event log for every build

The entry function lives in ``skillwright.builder.entrypoint.build_skill``;
it is not re-exported here because the emitters import this package's
configuration models.
"""
