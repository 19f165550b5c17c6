import os
import subprocess
import tempfile
import unittest
from unittest import mock

from autolaunch.launcher import LaunchReport, Launcher, spawnDetached
from autolaunch.launchqueue import LaunchQueue
from autolaunch.settings import AppRule, Settings
from autolaunch.xdg.desktopentry import DesktopEntry


def makeEntry(name, command=None, path=""):
    values = {"Name": name, "Exec": command or name.lower()}
    if path:
        values["Path"] = path
    return DesktopEntry(values, isApplication=True)


def makeQueue(*names):
    return LaunchQueue(makeEntry(name) for name in names)


class FakeChild(object):
    def __init__(self, exited=False):
        self.exited = exited
        self.polls = 0

    def poll(self):
        self.polls += 1
        return 0 if self.exited else None


class LauncherTests(unittest.TestCase):
    def setUp(self):
        self.events = []
        self.spawn = mock.Mock(side_effect=self.fakeSpawn)
        self.sleep = mock.Mock(side_effect=lambda seconds: self.events.append(("sleep", seconds)))

    def fakeSpawn(self, command, workDir):
        self.events.append(("spawn", command, workDir))
        return FakeChild()

    def makeLauncher(self, settings, **kwargs):
        return Launcher(settings, spawn=self.spawn, sleep=self.sleep, **kwargs)

    def test_empty_queue_reports_nothing_to_launch(self):
        launcher = self.makeLauncher(Settings())
        with self.assertLogs("autolaunch.launcher", level="INFO") as logs:
            report = launcher.launchAll(LaunchQueue())

        self.assertEqual(report, LaunchReport(0, 0, 0))
        self.assertIn("No applications to launch.", logs.output[0])
        self.spawn.assert_not_called()
        self.sleep.assert_not_called()

    def test_sleeps_before_each_launch_in_queue_order(self):
        launcher = self.makeLauncher(Settings(startupDelayMs=1000, delayMs=250))
        report = launcher.launchAll(makeQueue("One", "Two", "Three"))

        self.assertEqual(self.events, [
            ("sleep", 1.0), ("spawn", "one", ""),
            ("sleep", 0.25), ("spawn", "two", ""),
            ("sleep", 0.25), ("spawn", "three", ""),
        ])
        self.assertEqual(report, LaunchReport(3, 3, 0))

    def test_cumulative_delay(self):
        settings = Settings(startupDelayMs=300, delayMs=70)
        launcher = self.makeLauncher(settings)
        queue = makeQueue(*["App{}".format(index) for index in range(6)])

        delays = [launcher.delayFor(index, entry) for index, entry in enumerate(queue)]
        for index in range(len(queue)):
            self.assertEqual(sum(delays[:index + 1]), 300 + index * 70)

    def test_zero_delay_does_not_sleep(self):
        launcher = self.makeLauncher(Settings(startupDelayMs=0, delayMs=0))
        launcher.launchAll(makeQueue("One", "Two"))
        self.sleep.assert_not_called()
        self.assertEqual(self.spawn.call_count, 2)

    def test_app_delay_override_takes_precedence_everywhere(self):
        settings = Settings(startupDelayMs=1000, delayMs=200, appRules=[
            AppRule("One", delayOverrideMs=5),
            AppRule("Three", delayOverrideMs=0),
            AppRule("Two"),
        ])
        launcher = self.makeLauncher(settings)
        queue = makeQueue("One", "Two", "Three")

        self.assertEqual([launcher.delayFor(index, entry) for index, entry in enumerate(queue)], [5, 200, 0])

    def test_field_codes_stripped_and_working_directory_passed(self):
        launcher = self.makeLauncher(Settings(delayMs=0))
        queue = LaunchQueue([makeEntry("Viewer", "viewer %f --flag %u", path="/srv/data")])

        launcher.launchAll(queue)

        self.spawn.assert_called_once_with("viewer  --flag ", "/srv/data")

    def test_creation_failure_is_counted_and_does_not_stop_the_run(self):
        def spawn(command, workDir):
            if command == "two":
                raise OSError(11, "Resource temporarily unavailable")
            return FakeChild()

        launcher = Launcher(Settings(delayMs=0), spawn=spawn, sleep=self.sleep)
        with self.assertLogs("autolaunch.launcher", level="INFO") as logs:
            report = launcher.launchAll(makeQueue("One", "Two", "Three"))

        self.assertEqual(report, LaunchReport(total=3, succeeded=2, failed=1))
        self.assertEqual(report.total, report.succeeded + report.failed)
        self.assertTrue(any("[2/3] Deny launching: Two" in line for line in logs.output))
        self.assertTrue(any("[3/3] Access launching: Three" in line for line in logs.output))

    def test_nul_byte_in_command_or_directory_is_counted_as_failed(self):
        queue = LaunchQueue([
            makeEntry("Broken", "true\x00x"),
            makeEntry("BadDir", "true", path="/tm\x00p"),
            makeEntry("Fine", "true"),
        ])
        launcher = Launcher(Settings(delayMs=0), sleep=self.sleep)

        with self.assertLogs("autolaunch.launcher", level="ERROR"):
            report = launcher.launchAll(queue)

        self.assertEqual(report, LaunchReport(3, 1, 2))
        for child in launcher.children:
            child.wait(timeout=10)

    def test_exited_children_are_reaped(self):
        children = [FakeChild(exited=True), FakeChild(exited=False)]
        launcher = Launcher(Settings(delayMs=0), spawn=mock.Mock(side_effect=children), sleep=self.sleep)

        launcher.launchAll(makeQueue("Quick", "Slow"))

        self.assertEqual(launcher.children, [children[1]])
        self.assertGreater(children[0].polls, 0)

    def test_dry_run_neither_sleeps_nor_spawns(self):
        launcher = self.makeLauncher(Settings(startupDelayMs=1000, delayMs=1000), dryRun=True)
        report = launcher.launchAll(makeQueue("One", "Two"))

        self.spawn.assert_not_called()
        self.sleep.assert_not_called()
        self.assertEqual(report, LaunchReport(2, 2, 0))


class SpawnDetachedTests(unittest.TestCase):
    def test_runs_command_under_shell_in_new_session(self):
        with mock.patch("autolaunch.launcher.subprocess.Popen") as popen:
            child = spawnDetached("app --flag && other")

        self.assertIs(child, popen.return_value)
        args, kwargs = popen.call_args
        self.assertEqual(args[0], ["sh", "-c", "app --flag && other"])
        self.assertTrue(kwargs["start_new_session"])
        self.assertEqual(kwargs["stdin"], subprocess.DEVNULL)
        self.assertEqual(kwargs["stdout"], subprocess.DEVNULL)
        self.assertEqual(kwargs["stderr"], subprocess.DEVNULL)
        self.assertNotIn("cwd", kwargs)

    def test_bad_working_directory_falls_back_to_current_directory(self):
        missing = "/nonexistent/work/dir"
        with mock.patch("autolaunch.launcher.subprocess.Popen", side_effect=[
                    FileNotFoundError(2, "No such file or directory", missing),
                    mock.sentinel.child,
                ]) as popen:
            with self.assertLogs("autolaunch.launcher", level="ERROR") as logs:
                child = spawnDetached("app", missing)

        self.assertIs(child, mock.sentinel.child)
        self.assertEqual(popen.call_args_list[0][1]["cwd"], missing)
        self.assertNotIn("cwd", popen.call_args_list[1][1])
        self.assertIn(missing, logs.output[0])

    def test_falls_back_to_bash_without_sh(self):
        with mock.patch("autolaunch.launcher.subprocess.Popen", side_effect=[
                    FileNotFoundError(2, "No such file or directory", "sh"),
                    mock.sentinel.child,
                ]) as popen:
            child = spawnDetached("app")

        self.assertIs(child, mock.sentinel.child)
        self.assertEqual(popen.call_args_list[1][0][0], ["bash", "-c", "app"])

    def test_other_errors_propagate(self):
        with mock.patch("autolaunch.launcher.subprocess.Popen", side_effect=OSError(12, "Cannot allocate memory")):
            with self.assertRaises(OSError):
                spawnDetached("app", "/tmp")

    def test_real_child_gets_its_own_session_and_working_directory(self):
        with tempfile.TemporaryDirectory() as workDir:
            output = os.path.join(workDir, "pwd.txt")
            child = spawnDetached('pwd > "{}"; sleep 0.2'.format(output), workDir)
            try:
                self.assertEqual(os.getsid(child.pid), child.pid)
            finally:
                child.wait(timeout=10)

            with open(output) as outputFile:
                self.assertEqual(os.path.realpath(outputFile.read().strip()), os.path.realpath(workDir))


if __name__ == "__main__":
    unittest.main()
