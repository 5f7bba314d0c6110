"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Request keys
OP = "op"
ID = "id"
VAR = "var"
ARGS = "args"

# Request operations
DESCRIBE = "describe"
INVOKE = "invoke"
SHUTDOWN = "shutdown"

# Response keys
STATUS = "status"
VALUE = "value"
EX_MESSAGE = "ex-message"

# Status tags
DONE = "done"
ERROR = "error"

# Describe manifest keys
FORMAT = "format"
NAMESPACES = "namespaces"
NAME = "name"
VARS = "vars"
OPS = "ops"

# The only argument/result encoding this pod speaks.
JSON = "json"
