# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月

"""PMF设置

默认值从文件 'pmf/settings/default_settings.py' 读取，
用户特定设置从 '$HOME/.pmf/user_settings.py' 读取并覆盖默认设置。

设置必须用全大写字母定义，并可通过 pmf.settings.settings 作为属性访问::

    from ..settings import settings
    if settings.CHECK_BALANCES:
        ...

不是设置的名称（如导入的模块）需要在名称前加下划线。
"""

import os as _os
from .. import util as _util

PMF_USER_HOME = _os.path.join(_util.get_user_home(), ".pmf")

# 每天实际生长之后检查每个器官的干物质和氮平衡
CHECK_BALANCES = True

# 每天潜在生长开始时将所有速率变量归零
ZEROFY = True

# 日志配置
# 日志系统包含两个处理器：'console' 输出到屏幕，'file' 写入
# LOG_DIR 下的 LOG_FILE_NAME。日志文件最大1MB，最多保留7个历史文件。
# 需要更详细的日志时可以把级别设置为 DEBUG。

LOG_DIR = _os.path.join(PMF_USER_HOME, "logs")
LOG_FILE_NAME = _os.path.join(LOG_DIR, "pmf.log")
LOG_LEVEL_FILE = "INFO"
LOG_LEVEL_CONSOLE = "ERROR"
LOG_CONFIG = \
            {
                'version': 1,
                'disable_existing_loggers': True,
                'formatters': {
                    'standard': {
                        'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
                    },
                    'brief': {
                        'format': '[%(levelname)s] - %(message)s'
                    },
                },
                'handlers': {
                    'console': {
                        'level': LOG_LEVEL_CONSOLE,
                        'class': 'logging.StreamHandler',
                        'formatter': 'brief'
                    },
                    'file': {
                        'level': LOG_LEVEL_FILE,
                        'class': 'logging.handlers.RotatingFileHandler',
                        'formatter': 'standard',
                        'filename': LOG_FILE_NAME,
                        'maxBytes': 1024**2,
                        'backupCount': 7,
                        'mode': 'a',
                        'encoding': 'utf8'
                    },
                },
                'root': {
                         'handlers': ['console', 'file'],
                         'propagate': True,
                         'level': 'NOTSET'
                }
            }
