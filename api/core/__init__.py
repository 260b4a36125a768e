"""
Shared resource engine for the API.

`core/` holds the pieces every resource uses: DB wiring, the schema registry,
validation/extraction, pagination, the generic repository and the error
handlers. Resource packages (`businesses/`, `reviews/`, ...) only contain
their routes and link shapes.
"""
