from __future__ import annotations

"""
Scaffold Templates.

Minimal Luau stubs written by `woolly create`. Placeholders use
string.Template syntax ('$Name') so that Luau braces need no escaping.
"""

from string import Template
from typing import Dict

_LIFECYCLE = """--!strict
-- $Name ($Role)

local $Name = {
\t_inited = false,
\t_started = false,
\t_conns = {} :: { RBXScriptConnection },
\tPriority = 50,
}

function $Name:Init(deps)
\tif self._inited then return end
\tself._inited = true
end

function $Name:Start()
\tif not self._inited or self._started then return end
\tself._started = true
end

function $Name:Destroy()
\tfor _, conn in self._conns do
\t\tconn:Disconnect()
\tend
\ttable.clear(self._conns)
\tself._started = false
\tself._inited = false
end

return $Name
"""

_CLASS = """--!strict
-- $Name ($Role)

local $Name = {}
$Name.__index = $Name

function $Name.new(opts)
\tlocal self = setmetatable({}, $Name)
\tself._opts = opts or {}
\tself._conns = {}
\treturn self
end

function $Name:Destroy()
\tfor _, conn in self._conns do
\t\tconn:Disconnect()
\tend
\ttable.clear(self._conns)
end

return $Name
"""

_PLAIN = """--!strict
-- $Name ($Role)
export type $Name = {}

local $Name = {}

return $Name :: $Name
"""

_DATA_TYPE = """--!strict
-- $Name (GameData type)

local DATA_TYPE_NAME = "$Name"
local PUBLIC_FIELD_WHITELIST = {
\tid = true, name = true, icon = true, rarity = true,
}
local DATA = {
}

return {
\tname = DATA_TYPE_NAME,
\tpublic_field_whitelist = PUBLIC_FIELD_WHITELIST,
\titems = DATA,
}
"""

_MONETISATION = """--!strict
-- $Name (Monetisation definitions)

local Handlers = {
}

return {
\t$Field = {
\t},
}
"""

TEMPLATES: Dict[str, Template] = {
    "service": Template(_LIFECYCLE),
    "controller": Template(_LIFECYCLE),
    "component": Template(_CLASS),
    "class_shared": Template(_CLASS),
    "class_server": Template(_CLASS),
    "package": Template(_PLAIN),
    "config": Template(_PLAIN),
    "util": Template(_PLAIN),
    "data_type": Template(_DATA_TYPE),
    "monetisation": Template(_MONETISATION),
}

ROLES: Dict[str, str] = {
    "service": "Service",
    "controller": "Controller",
    "component": "Component",
    "class_shared": "Shared Class",
    "class_server": "Server Class",
    "package": "Package",
    "config": "Config",
    "util": "Util",
}


def render(template_key: str, name: str, **extra: str) -> str:
    """
    Fill a template for a module named `name`.

    Raises:
        KeyError: If `template_key` is unknown.
    """
    return TEMPLATES[template_key].substitute(
        Name=name, Role=ROLES.get(template_key, ""), **extra
    )
