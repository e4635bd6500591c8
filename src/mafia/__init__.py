# Copyright (c) 2025 The mafia authors
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
MAFIA - MFA For AWS.

A Python CLI tool that trades a one-time MFA code for temporary AWS session
credentials and prints them or saves them to the AWS credentials file.
"""

__version__ = "0.1.0"
