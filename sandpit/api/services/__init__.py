# This file marks the services package for API business logic modules.
# Service modules isolate query logic from transport concerns.
