# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl)，2024年3月
import os

import yaml

from .. import exceptions as exc


class YAMLAgroManagementReader(dict):
    """读取PMF农事管理文件（YAML格式）。

    :param fname: 农事管理文件的文件名。如果fname不是绝对路径，则假定文件位于当前工作目录。

    返回的字典就是文件中 `AgroManagement` 部分的内容，可以直接传给 `Engine`。
    """

    def __init__(self, fname):
        fname_fp = os.path.normpath(os.path.abspath(fname))
        if not os.path.exists(fname_fp):
            msg = "Cannot find agromanagement file: %s" % fname_fp
            raise exc.PMFError(msg)

        with open(fname_fp, 'r', encoding='utf-8') as fp:
            try:
                r = yaml.safe_load(fp)
            except yaml.YAMLError as e:
                msg = "Failed parsing agromanagement file %s: %s" % (fname_fp, e)
                raise exc.PMFError(msg)

        if not isinstance(r, dict) or not r.get("AgroManagement"):
            msg = "No 'AgroManagement' section found in file: %s" % fname_fp
            raise exc.PMFError(msg)

        dict.__init__(self, r['AgroManagement'])

    def __str__(self):
        return yaml.dump(dict(self), default_flow_style=False)
