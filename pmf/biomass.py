# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
"""生物量库以及器官与分配器之间交换的记录类型

所有重量单位为 g/m2。
"""
from collections import namedtuple

from .traitlets import HasTraits, Float
from . import exceptions as exc

# 浮点噪声容差，低于此值的负数才被视为错误
POOL_TOLERANCE = 1e-9

BiomassPoolType = namedtuple("BiomassPoolType", "Structural, NonStructural, Metabolic",
                             defaults=(0., 0., 0.))
BiomassSupplyType = namedtuple("BiomassSupplyType", "Fixation, Retranslocation, Reallocation, Uptake",
                               defaults=(0., 0., 0., 0.))
BiomassAllocationType = namedtuple("BiomassAllocationType",
                                   "Structural, NonStructural, Metabolic, Retranslocation, Reallocation",
                                   defaults=(0., 0., 0., 0., 0.))
OrganBiomassRemovalType = namedtuple("OrganBiomassRemovalType",
                                     "FractionLiveToRemove, FractionDeadToRemove, "
                                     "FractionLiveToResidue, FractionDeadToResidue",
                                     defaults=(0., 0., 0., 0.))


class Biomass(HasTraits):
    """一个状态（活体或死亡）的干物质和氮库

    库分为结构性、非结构性（储存）和代谢性三部分，每部分都有重量和氮量。
    所有分量在每次操作之后都不能为负；会使分量小于 -1e-9 的操作抛出
    `BiomassPoolError` 且不修改库。

    示例::

        >>> live = Biomass(StructuralWt=2., StructuralN=0.04)
        >>> loss = live * 0.1
        >>> live.subtract(loss).Wt
        1.8
        >>> Biomass(StructuralWt=1.).subtract(Biomass(StructuralWt=2.))
        Traceback (most recent call last):
        ...
        pmf.exceptions.BiomassPoolError: ...
    """
    StructuralWt = Float(0.)
    NonStructuralWt = Float(0.)
    MetabolicWt = Float(0.)
    StructuralN = Float(0.)
    NonStructuralN = Float(0.)
    MetabolicN = Float(0.)

    fields = ("StructuralWt", "NonStructuralWt", "MetabolicWt",
              "StructuralN", "NonStructuralN", "MetabolicN")

    def __init__(self, **kwargs):
        HasTraits.__init__(self)
        unknown = set(kwargs).difference(self.fields)
        if unknown:
            msg = "Unknown biomass component(s): %s" % sorted(unknown)
            raise exc.BiomassPoolError(msg)
        values = {f: float(kwargs.get(f, 0.)) for f in self.fields}
        self._check_non_negative(values, "initialize")
        self._set(values)

    def _set(self, values):
        for f in self.fields:
            setattr(self, f, values[f])

    def _check_non_negative(self, values, action):
        negative = [f for f in self.fields if values[f] < -POOL_TOLERANCE]
        if negative:
            msg = "Cannot %s biomass pool: component(s) %s would become negative (%s)." % \
                  (action, ", ".join(negative), ", ".join("%g" % values[f] for f in negative))
            raise exc.BiomassPoolError(msg)

    @property
    def Wt(self):
        """结构性、非结构性和代谢性重量之和"""
        return self.StructuralWt + self.NonStructuralWt + self.MetabolicWt

    @property
    def N(self):
        """结构性、非结构性和代谢性氮量之和"""
        return self.StructuralN + self.NonStructuralN + self.MetabolicN

    def add(self, other):
        """将 other 的各分量加到本库，返回本库"""
        values = {f: getattr(self, f) + getattr(other, f) for f in self.fields}
        self._check_non_negative(values, "add to")
        self._set(values)
        return self

    def subtract(self, other):
        """从本库减去 other 的各分量，返回本库"""
        values = {f: getattr(self, f) - getattr(other, f) for f in self.fields}
        self._check_non_negative(values, "subtract from")
        self._set(values)
        return self

    def multiply(self, factor):
        """将本库的各分量乘以非负的 factor，返回本库"""
        if factor < 0.:
            msg = "Cannot scale biomass pool by negative factor %g." % factor
            raise exc.BiomassPoolError(msg)
        self._set({f: getattr(self, f) * factor for f in self.fields})
        return self

    def __mul__(self, factor):
        return self.copy().multiply(factor)

    __rmul__ = __mul__

    def __add__(self, other):
        return self.copy().add(other)

    def copy(self):
        return Biomass(**{f: getattr(self, f) for f in self.fields})

    def clear(self):
        self._set({f: 0. for f in self.fields})

    def __repr__(self):
        comps = ", ".join("%s=%g" % (f, getattr(self, f)) for f in self.fields)
        return "Biomass(%s)" % comps
