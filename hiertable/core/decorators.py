'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from functools import wraps

from hiertable.core.log import Log

def requires_node(method):
    """
    Decorator to silently skip method execution if the key argument is not
    in self.index. The wrapped method must take the key as its first argument.
    """
    @wraps(method)
    def wrapper(self, key, *args, **kwargs):
        if key is None or key not in self.index:
            Log.debug(f"{method.__name__}({key=}): unknown key, ignored.", 2)
            return None
        return method(self, key, *args, **kwargs)
    return wrapper
