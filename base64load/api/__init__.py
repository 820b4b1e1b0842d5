"""Host-facing adapters.

Module split:
    - `arguments`: validation of raw Sass call values.
    - `loader`: `create_loader` factory and function-table registration.
    - `sass_bridge`: libsass `custom_functions` integration.
    - `cli`: one-shot command-line encoder.
"""
