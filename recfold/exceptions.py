# RecFold, Crossfold Planning for Top-N Recommendation Evaluation
# Copyright (C) 2020  Froomle N.V.
# License: GNU AGPLv3 - https://gitlab.com/recpack-maintainers/recpack/-/blob/master/LICENSE
# Author:
#   Lien Michiels
#   Robin Verachtert


class ConfigurationError(RuntimeError):
    """Raised when a crossfold specification is missing required settings,
    or contains settings that can't be used to plan a crossfold.
    """
