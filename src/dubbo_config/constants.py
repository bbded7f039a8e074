"""Well-known keys shared by the configuration engine."""

from __future__ import annotations

# Root namespace of every override / property key: dubbo.<tag>.[<id>.]<property>
PROPERTY_ROOT = "dubbo"

# Scope used by outer configuration levels when they pre-fill a parameter map
DEFAULT_KEY = "default"

# Leading marker that removes an extension from a multi-extension list ("-echo")
REMOVE_VALUE_PREFIX = "-"

# Persisted property file location
PROPERTIES_FILE_KEY = "dubbo.properties.file"
PROPERTIES_FILE_ENV = "DUBBO_PROPERTIES_FILE"
DEFAULT_PROPERTIES_FILE = "dubbo.properties"

SHUTDOWN_WAIT_KEY = "dubbo.service.shutdown.wait"

# Async callback attributes of a method
ON_INVOKE_INSTANCE_KEY = "oninvoke.instance"
ON_INVOKE_METHOD_KEY = "oninvoke.method"
ON_RETURN_INSTANCE_KEY = "onreturn.instance"
ON_RETURN_METHOD_KEY = "onreturn.method"
ON_THROW_INSTANCE_KEY = "onthrow.instance"
ON_THROW_METHOD_KEY = "onthrow.method"

REFERENCE_FILTER_KEY = "reference.filter"
INVOKER_LISTENER_KEY = "invoker.listener"
