"""Permission model: vocabulary, role defaults, normalization and resolution."""
