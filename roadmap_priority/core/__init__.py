# Copyright 2026 ChakraOps
# SPDX-License-Identifier: MIT
