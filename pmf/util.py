# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
"""PMF的杂项工具
"""
import os
import datetime
import platform
import tempfile
import logging
from bisect import bisect_left


def float_gt(arg1, arg2, tol=1e-9):
    """arg1 > arg2，差值超过绝对容差 tol 时才成立"""
    return arg1 - arg2 > tol


def float_lt(arg1, arg2, tol=1e-9):
    """arg1 < arg2，差值超过绝对容差 tol 时才成立"""
    return arg2 - arg1 > tol


def float_eq(arg1, arg2, tol=1e-9):
    """|arg1 - arg2| <= tol"""
    return abs(arg1 - arg2) <= tol


def limit(vmin, vmax, v):
    """将 v 限制在 [vmin, vmax] 区间内"""
    if vmin > vmax:
        raise RuntimeError("Min value (%f) larger than max (%f)" % (vmin, vmax))
    return max(vmin, min(vmax, v))


class Afgen(object):
    """AFGEN函数：对XY值对表进行分段线性插值。

    :param tbl_xy: 包含XY值对的列表 [x1, y1, x2, y2, ...]，X值应单调递增。

    超出表范围时返回端点的值。

    例子::

        >>> f = Afgen([0, 0, 1, 1, 5, 10])
        >>> f(0.5)
        0.5
        >>> f(1.5)
        2.125
        >>> f(6)
        10.0
        >>> f(-1)
        0.0
    """

    def __init__(self, tbl_xy):

        if len(tbl_xy) < 2 or len(tbl_xy) % 2 != 0:
            msg = "AFGEN table should contain a non-empty list of XY pairs: %s" % tbl_xy
            raise ValueError(msg)

        x_list = self.x_list = [float(x) for x in tbl_xy[0::2]]
        y_list = self.y_list = [float(y) for y in tbl_xy[1::2]]
        for x1, x2 in zip(x_list, x_list[1:]):
            if x2 <= x1:
                msg = "X values for AFGEN input list not strictly ascending: %s" % x_list
                raise ValueError(msg)

        intervals = list(zip(x_list, x_list[1:], y_list, y_list[1:]))
        self.slopes = [(y2 - y1)/(x2 - x1) for x1, x2, y1, y2 in intervals]

    def __call__(self, x):

        if x <= self.x_list[0]:
            return self.y_list[0]
        if x >= self.x_list[-1]:
            return self.y_list[-1]

        i = bisect_left(self.x_list, x) - 1
        return self.y_list[i] + self.slopes[i] * (x - self.x_list[i])

    def __repr__(self):
        pairs = ", ".join("(%s, %s)" % xy for xy in zip(self.x_list, self.y_list))
        return "Afgen([%s])" % pairs


def is_a_month(day):
    """如果给定日期是该月的最后一天则返回True。"""
    return (day + datetime.timedelta(days=1)).day == 1


def is_a_week(day, weekday=0):
    """默认周一为每周的第一天。周一为0，周日为6。"""
    return day.weekday() == weekday


def is_a_dekad(day):
    """如果日期在旬的边界，例如每月10日、20日或最后一天，则返回True。"""
    return day.day in (10, 20) or is_a_month(day)


def check_date(indate):
    """
    检查日期的表示形式并尝试转换为datetime.date对象。

    支持以下格式：

    1. 一个date对象
    2. 一个datetime对象
    3. 格式为YYYYMMDD的字符串
    4. 格式为YYYYDDD的字符串
    5. 格式为YYYY-MM-DD的字符串
    """
    if isinstance(indate, datetime.datetime):
        return indate.date()
    elif isinstance(indate, datetime.date):
        return indate
    elif isinstance(indate, str):
        skey = indate.strip()
        formats = {8: "%Y%m%d", 7: "%Y%j", 10: "%Y-%m-%d"}
        if len(skey) in formats:
            return datetime.datetime.strptime(skey, formats[len(skey)]).date()

    msg = "Input value not recognized as date: %s"
    raise KeyError(msg % indate)


def version_tuple(v):
    """
    从版本字符串创建版本元组，以便对版本进行一致比较::

        >>> '2.12.9' > '2.7.8'
        False
        >>> version_tuple('2.12.9') > version_tuple('2.7.8')
        True
    """
    return tuple(map(int, (v.split("."))))


def get_user_home():
    """
    与平台无关地获取用户主目录。
    如果PMF运行在系统用户下，则返回tempfile.gettempdir()返回的临时目录。
    """
    user_home = None
    if platform.system() == "Windows":
        user = os.getenv("USERNAME")
    elif platform.system() in ("Linux", "Darwin"):
        user = os.getenv("USER")
    else:
        user = None
        msg = "Platform not recognized, using system temp directory for PMF settings."
        logging.getLogger("pmf").warning(msg)

    if user is not None:
        user_home = os.path.expanduser("~")
    if user_home is None:
        user_home = tempfile.gettempdir()

    return user_home
