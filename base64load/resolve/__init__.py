"""Source resolution package.

Module split:
    - `classifier`: syntactic remote-vs-local decision.
    - `local`: filesystem lookup and read.
    - `remote`: gated HTTP fetch behind an injectable fetcher.
    - `result`: `FileResult` contract shared by both resolvers.
"""
