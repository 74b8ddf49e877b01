# -*- coding: utf-8 -*-

from .callback_list import CallbackList, Flags
from .decorators import wrap_promise
from .deferred import Deferred, rejected, resolved
from .promise import Promise
from .when import when

__all__ = ['CallbackList', 'Flags', 'Deferred', 'Promise', 'rejected',
           'resolved', 'when', 'wrap_promise']
