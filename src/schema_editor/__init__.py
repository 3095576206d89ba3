"""JSON Schema authoring toolkit: schema model, field projection and editing."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
