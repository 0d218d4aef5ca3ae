# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""commitkit: Conventional Commits parsing, version bumps, and changelogs.

Turns raw commit messages into structured commits, classifies each one
by its semantic version impact, computes the next version, validates
``category/slug`` branch names, and groups commits into changelog
sections. Everything in the core is pure; configuration is an immutable
value passed explicitly.

Usage::

    from commitkit.plan import plan_release
    from commitkit.versioning import SemanticVersion

    plan = plan_release(['feat: add login', 'fix: typo'], SemanticVersion.parse('1.2.3'))
    plan.next_version  # SemanticVersion(major=1, minor=3, patch=0)
"""

__version__ = '0.1.0'
