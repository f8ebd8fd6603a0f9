# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
from pathlib import Path
import textwrap

from .. import exceptions as exc


class ConfigurationLoader(object):
    """从PMF模型配置文件（Python语法）加载模型配置

    相对路径被认为位于 `pmf/conf/` 目录中。

    :param config: 配置文件名（字符串或 pathlib.Path）
    """
    _required_attr = ("PLANT", "RESIDUES", "AGROMANAGEMENT", "OUTPUT_VARS", "OUTPUT_INTERVAL",
                      "OUTPUT_INTERVAL_DAYS", "SUMMARY_OUTPUT_VARS")
    model_config_file = None
    description = None

    def __init__(self, config):

        if not isinstance(config, (str, Path)):
            msg = ("Keyword 'config' should provide the name of the file (string or pathlib.Path) " +
                   "storing the configuration of the model PMF should run.")
            raise exc.PMFError(msg)

        self.defined_attr = []
        config = Path(config)
        if config.is_absolute():
            mconf = config
        else:
            pmf_dir = Path(__file__).parent.parent
            mconf = pmf_dir / "conf" / config
        model_config_file = mconf.resolve()

        if not model_config_file.exists():
            msg = "PMF model configuration file does not exist: %s" % model_config_file
            raise exc.PMFError(msg)
        self.model_config_file = model_config_file

        try:
            loc = {}
            with open(model_config_file) as fp:
                bytecode = compile(fp.read(), str(model_config_file), 'exec')
            exec(bytecode, {}, loc)
        except Exception as e:
            msg = "Failed to load configuration from file '%s' due to: %s"
            msg = msg % (model_config_file, e)
            raise exc.PMFError(msg)

        if "__doc__" in loc:
            desc = loc.pop("__doc__")
            if len(desc) > 0:
                self.description = desc
                if self.description[-1] != "\n":
                    self.description += "\n"

        for key, value in list(loc.items()):
            if key.isupper():
                self.defined_attr.append(key)
                setattr(self, key, value)

        diff = set(self._required_attr).difference(set(self.defined_attr))
        if diff:
            msg = "One or more compulsory configuration items missing: %s" % sorted(diff)
            raise exc.PMFError(msg)

    def __str__(self):
        msg = "PMF ConfigurationLoader from file:\n"
        msg += "  %s\n\n" % self.model_config_file
        if self.description is not None:
            msg += ("%s Header of configuration file %s\n" % ("-"*20, "-"*20))
            msg += self.description
            msg += ("%s Contents of configuration file %s\n" % ("-"*19, "-"*19))
        for k in self.defined_attr:
            r = "%s: %s" % (k, getattr(self, k))
            msg += (textwrap.fill(r, subsequent_indent="  ") + "\n")
        return msg

    def update_output_variable_lists(self, output_vars=None, summary_vars=None, terminal_vars=None):
        """更新配置文件中定义的输出变量列表

        字符串和列表扩展当前列表，元组和集合替换当前列表。

        :param output_vars: 添加到/替换 OUTPUT_VARS 的变量名
        :param summary_vars: 添加到/替换 SUMMARY_OUTPUT_VARS 的变量名
        :param terminal_vars: 添加到/替换 TERMINAL_OUTPUT_VARS 的变量名
        """
        config_varnames = ["OUTPUT_VARS", "SUMMARY_OUTPUT_VARS", "TERMINAL_OUTPUT_VARS"]
        for varitems, config_varname in zip([output_vars, summary_vars, terminal_vars], config_varnames):
            if varitems is None:
                continue
            current = list(getattr(self, config_varname, []))
            if isinstance(varitems, str):
                current.extend(varitems.split())
            elif isinstance(varitems, list):
                current.extend(varitems)
            elif isinstance(varitems, (tuple, set)):
                current = list(varitems)
            else:
                msg = "Unrecognized input for %s: %s" % (config_varname, varitems)
                raise exc.PMFError(msg)
            setattr(self, config_varname, current)
