# performance/services/__init__.py
# Submodules: scoring (pure), goals (persistence), reports (aggregations).
# Import them directly; scoring must stay free of model imports.
