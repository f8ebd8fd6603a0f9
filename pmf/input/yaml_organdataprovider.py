# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
import logging
import os

import yaml
import requests

from .. import exceptions as exc
from ..util import version_tuple


class YAMLOrganDataProvider(dict):
    """
    读取YAML格式的植物和器官参数集的数据提供者。

        :param fpath: YAML参数文件的完整路径
        :param repository: YAML参数文件的URL，应为 *raw* 内容
            （例如以 'https://raw.githubusercontent.com' 开头）

    一个参数文件可以包含多个植物，每个植物由作物类型和若干器官组成。
    每个参数以 ``[值, 描述, 单位]`` 的形式给出，值可以是数值或AFGEN定义::

        Version: 1.0.0
        PlantParameters:
            Plants:
                wheat:
                    CropType: wheat
                    Organs:
                        Leaf:
                            InitialWt: [2.0, 出苗时的结构性干物质, g m-2]
                            DMDemand:
                            - {XVariable: DAE, Table: [0, 1.0, 60, 5.0, 100, 0.0]}
                            - 干物质需求
                            - g m-2 d-1
                            ...

    加载后还没有激活任何植物，需要先调用 `set_active_plant()`::

        >>> p = YAMLOrganDataProvider(fpath="generic_plant.yaml")
        >>> p.set_active_plant("wheat")
        >>> p["CropType"], sorted(p["Organs"])
        ('wheat', ['Grain', 'Leaf', 'Root', 'Stem'])
    """

    current_plant_name = None
    repository = None

    # 数据提供者与YAML参数文件版本的兼容性
    compatible_version = "1.0.0"

    def __init__(self, fpath=None, repository=None):
        dict.__init__(self)
        self._store = {}

        if fpath is not None:
            self.repository = os.path.abspath(fpath)
            self.read_local_file(self.repository)
        elif repository is not None:
            self.repository = repository
            self.read_remote_file(repository)
        else:
            msg = "%s needs either a file path (fpath) or a repository URL." % self.__class__.__name__
            raise exc.PMFError(msg)

    def read_local_file(self, fpath):
        """从本地文件系统读取YAML参数文件"""
        if not os.path.exists(fpath):
            msg = "Cannot find plant parameter file: %s" % fpath
            raise exc.PMFError(msg)
        with open(fpath, encoding='utf-8') as fp:
            try:
                parameters = yaml.safe_load(fp)
            except yaml.YAMLError as e:
                msg = "Failed parsing plant parameter file %s: %s" % (fpath, e)
                raise exc.PMFError(msg)
        self._check_version(parameters, fpath)
        self._add_plants(parameters, fpath)

    def read_remote_file(self, url):
        """从远程仓库读取YAML参数文件

        :param url: 参数文件原始内容的url
        """
        self.logger.info("Reading plant parameters from %s" % url)
        try:
            response = requests.get(url)
            response.raise_for_status()
        except requests.RequestException as e:
            msg = "Failed retrieving plant parameters from %s: %s" % (url, e)
            raise exc.PMFError(msg)
        try:
            parameters = yaml.safe_load(response.text)
        except yaml.YAMLError as e:
            msg = "Failed parsing plant parameters from %s: %s" % (url, e)
            raise exc.PMFError(msg)
        self._check_version(parameters, url)
        self._add_plants(parameters, url)

    def _check_version(self, parameters, source):
        """检查参数文件的版本与此数据提供者支持的版本是否一致"""
        try:
            v = parameters['Version']
        except (KeyError, TypeError):
            msg = "Version check failed on plant parameter file: %s" % source
            raise exc.PMFError(msg)
        try:
            compatible = version_tuple(str(v)) == version_tuple(self.compatible_version)
        except ValueError:
            compatible = False
        if not compatible:
            msg = "Version supported by %s is %s, while parameter set version is %s!"
            raise exc.PMFError(msg % (self.__class__.__name__, self.compatible_version, v))

    def _add_plants(self, parameters, source):
        try:
            plants = parameters["PlantParameters"]["Plants"]
        except (KeyError, TypeError):
            msg = "No 'PlantParameters: Plants' section in plant parameter file: %s" % source
            raise exc.PMFError(msg)
        self._store.update(plants)

    def set_active_plant(self, plant_name, variety_name=None):
        """激活指定植物的参数集

        在设置前会先清空已激活的参数集。参数值取 ``[值, 描述, 单位]`` 中的值。

        :param plant_name: 植物名称
        :param variety_name: 品种名称，目前不区分品种，只用于日志
        """
        self.clear()
        if plant_name not in self._store:
            msg = "Plant name '%s' not available in %s" % (plant_name, self.__class__.__name__)
            raise exc.PMFError(msg)

        plant = self._store[plant_name]
        organs = {}
        for organ_name, organ_parameters in (plant.get("Organs") or {}).items():
            organs[organ_name] = {k: self._get_value(v) for k, v in (organ_parameters or {}).items()}

        self.current_plant_name = plant_name
        self.update({"CropType": plant.get("CropType", plant_name), "Organs": organs})
        self.logger.debug("Activated plant '%s' (variety %s) with organs: %s" %
                          (plant_name, variety_name, ", ".join(organs)))

    @staticmethod
    def _get_value(v):
        if isinstance(v, list):
            return v[0]
        return v

    def get_plants(self):
        """返回可用植物的名称"""
        return list(self._store.keys())

    def __str__(self):
        if not self:
            msg = "Plant parameters loaded from: %s\n" \
                  "No active plant parameter set!\n" % self.repository
            return msg
        msg = "Plant parameters loaded from: %s\n" % self.repository
        msg += "%s - current active plant '%s' with organs: %s\n" % \
               (self.__class__.__name__, self.current_plant_name, ", ".join(self["Organs"]))
        return msg

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        return logging.getLogger(loggername)
