################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

from gyro_parallax.config.gyro_config import GyroConfig
from gyro_parallax.config.gyro_config import GyroConfigError
from gyro_parallax.config.gyro_config import load_yaml
from gyro_parallax.config.gyro_config import loads_yaml
from gyro_parallax.config.gyro_params import GyroParams
from gyro_parallax.config.gyro_params import GyroParamsError


__all__ = [
    "GyroConfig",
    "GyroConfigError",
    "GyroParams",
    "GyroParamsError",
    "load_yaml",
    "loads_yaml",
]
