# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
import os
import importlib.util
import warnings

from . import default_settings


class Settings(object):
    """
    PMF 的设置。

    默认值从模块 pmf.settings.default_settings 中读取。如果存在
    $HOME/.pmf/user_settings.py，其中的设置会覆盖默认值；所有可能的
    变量见默认设置文件。
    """

    def __setattr__(self, name, value):
        if name == "LOG_DIR":
            os.makedirs(value, exist_ok=True)
        object.__setattr__(self, name, value)

    def __init__(self):
        self._update_from_module(default_settings, "default_settings")

        user_settings_file = os.path.join(default_settings.PMF_USER_HOME, "user_settings.py")
        if os.path.exists(user_settings_file):
            spec = importlib.util.spec_from_file_location("pmf_user_settings", user_settings_file)
            mod = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(mod)
            self._update_from_module(mod, "user_settings")

    def _update_from_module(self, mod, label):
        # 只接受全大写的设置项
        for setting in dir(mod):
            if setting.isupper():
                setattr(self, setting, getattr(mod, setting))
            elif setting.startswith("_"):
                pass
            else:
                msg = ("Settings should be ALL_CAPS. Setting '%s' in %s " +
                       "will be ignored.") % (setting, label)
                warnings.warn(msg)


settings = Settings()
