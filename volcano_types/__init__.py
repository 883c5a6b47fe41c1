"""
Volcano Types — shared Python package.

Contains the core logic for the volcano type classification analysis:
  - volcano_types.data.loader            — TidyTuesday volcano CSV loading
  - volcano_types.features.labels        — three-way volcano type labels
  - volcano_types.modeling.resampling    — bootstrap resamples
  - volcano_types.modeling.recipe        — preprocessing chain with SMOTE
  - volcano_types.modeling.model         — random forest and workflow
  - volcano_types.modeling.workflow      — fitting across resamples
  - volcano_types.evaluate               — confusion matrix, precision, importance
  - volcano_types.plots                  — world maps and diagnostic figures
  - volcano_types.config                 — YAML config loading
  - volcano_types.logging_utils          — project-wide logger factory
"""
