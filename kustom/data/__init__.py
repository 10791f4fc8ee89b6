# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

from kustom.data.synthetic import SyntheticDataset, make_classification_data

__all__ = ["SyntheticDataset", "make_classification_data"]
