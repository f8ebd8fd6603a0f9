# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
from functools import wraps


class descript(object):
    def __init__(self, f, lockattr):
        self.f = f
        self.lockattr = lockattr

    def __get__(self, instance, klass):
        if instance is None:
            return self.make_unbound(klass)
        return self.make_bound(instance)

    def make_unbound(self, klass):
        @wraps(self.f)
        def wrapper(*args, **kwargs):
            raise TypeError(
                '%s() must be called on a %s instance' % (self.f.__name__, klass.__name__)
            )
        return wrapper

    def make_bound(self, instance):
        @wraps(self.f)
        def wrapper(*args, **kwargs):
            attr = getattr(instance, self.lockattr)
            if attr is not None:
                attr.unlock()
            try:
                return self.f(instance, *args, **kwargs)
            finally:
                attr = getattr(instance, self.lockattr)
                if attr is not None:
                    attr.lock()
        # 之后直接在实例上找到 wrapper
        setattr(instance, self.f.__name__, wrapper)
        return wrapper


def prepare_states(f):
    '''
    类方法装饰器，在方法执行期间解锁 states 对象，执行后重新锁定。
    '''
    return descript(f, "states")


def prepare_rates(f):
    '''
    类方法装饰器，在方法执行期间解锁 rates 对象，执行后重新锁定。
    '''
    return descript(f, "rates")
