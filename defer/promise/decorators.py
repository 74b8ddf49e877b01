# -*- coding: utf-8 -*-

from functools import wraps

from .deferred import Deferred, rejected, resolved
from .promise import Promise


def wrap_promise(f):
    """Decorator who converts the result in a Promise object.

    If the function decorated returns a Promise, it's transmitted as is. If it
    returns a Deferred, its Promise is returned instead.
    Else, a new Promise is resolved with the returned value. If the function
    raises an exception, the Promise is rejected with this exception.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            result = f(*args, **kwargs)
        except Exception as error:
            return rejected(error)

        if isinstance(result, (Promise, Deferred)):
            return result.promise()
        return resolved(result)

    return wrapper
