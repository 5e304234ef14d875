# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

"""
Pytest configuration and shared fixtures for header-warden tests.
"""

import json
import os

import pytest

import header_warden.config as hw_config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every test away from any real config file or HEADER_WARDEN_* variable."""
    for key in list(os.environ):
        if key.startswith("HEADER_WARDEN_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(hw_config, "_config", None)
    yield


@pytest.fixture
def write_source(tmp_path):
    """Write C++ source text to a file below tmp_path and return its path."""

    def _write(name, text):
        path = tmp_path / "src" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def badly_formatted_source():
    return """/**
 * @file example.hpp
 *
 * @brief Example of a badly formatted file.
 */

// Bare include: This include does not have any accompanying comments
#include <iostream>
        #INCLUDE <FMT/CORE.H>

// Unused functions listed as comments: std::find is not used within the file
#include <algorithm>  //     for std::find

// Unused functions listed as comments: std::transform and std::back_inserter are not used
    #INCLUDE <ITERATOR>  // for std::back_inserter, std::transform

// OK: This include is correctly documented with the used functions listed in the comments
#include <string>  // for std::string,    std::to_string
#include <vector>  // for   std::vector

// OK: uses "std::string" and "std::to_string" from <string> and "std::vector" from <vector>
std::vector<STD::STRING> foo(const std::vector<int> &vec)
{
    std::vector<std::string> result;
    for (const auto &i : vec) {
        result.emplace_back(std::to_string(i));
    }
    return result;
}

// Unlisted function: uses "std::sort", but it's not listed in the comments after the includes
std::vector<int> bar(const std::vector<int> &v)
{
    std::vector<int> result(v);
    STD::SORT(RESULT.BEGIN(), RESULT.END());
    return result;
}
"""


@pytest.fixture
def no_issues_source():
    return """/**
 * @file shell.hpp
 *
 * @brief Run shell commands.
 */

#pragma once

#include <stdexcept>  // for std::runtime_error
#include <string>     // for std::string

namespace core::shell {

/**
 * @brief Base class for exceptions raised by the command builder.
 */
class PathError : public std::runtime_error {
  public:
    explicit PathError(const std::string &message)
        : std::runtime_error(message) {}
};

/**
 * @brief Build the command to open the filepath in the default web browser.
 *
 * @return Command to open the default web browser (e.g., open "~/data.html").
 */
[[nodiscard]] std::string build_command(const std::string &filepath);

// Now let's see if comments are ignored.
// The output can be printed using std::cout.
/**
 * The output can be printed using std::cout.
 * The output can be printed using std::cout.
 */

}  // namespace core::shell"""


@pytest.fixture
def bare_source():
    return """/**
 * @file args.cpp
 */

// Extra spaces
    #include <string>        //STD::STRING

    #include <fmt/core.h>
#include<pathmaster/pathmaster.hpp>

    #include "args.hpp"
    #include "version.hpp"

void print_help(const int argc)
{
    const std::string help_message = "Usage: yt-table [-h] [-v]";
    if (argc == 1) {
        fmt::print("{}", help_message);
    }
}"""


@pytest.fixture
def unused_source():
    return r"""  #include<string>//std::string,std::to_string
#INCLUDE <IOSTREAM>      //     STD::COUT
#INCLUDE <vector>//std::vector
#include <ALGORITHM>//for std::find, STD::TRANSFORM, std::back_inserter
#include <cstddef>        // for std::size_t,        std::nullptr_t

const std::size_t pi = 3.14159;
std::cout << "Hello world!\n";"""


@pytest.fixture
def unlisted_source():
    return r"""#include <iostream>  // for std::cout
// #include <cstddef>  // for std::size_t
const std::size_t pi = 3.14159;
std::sort(v.begin(), v.end());
std::cout << "Hello world!\n";"""


@pytest.fixture
def test_config_file(tmp_path):
    """Create a temporary config file for testing."""
    config_path = tmp_path / "header_warden.json"
    config_data = {
        "report": {"bare": False, "unused": True, "unlisted": True},
        "scan": {"extensions": [".cpp", "hpp"], "ignore_dirs": ["third_party"]},
        "run": {"workers": 3, "parallel_threshold": 2},
        "logging": {"level": "debug"},
        "api": {"port": 9000, "api_key": "secret", "allowed_ips": ["testclient"]},
    }
    config_path.write_text(json.dumps(config_data, indent=2), encoding="utf-8")
    yield config_path
