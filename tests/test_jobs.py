import contextlib
import importlib.util
import io
import json
import os
import pathlib
import sys
import tempfile
import unittest
from unittest import mock

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "scripts"))
SPEC = importlib.util.spec_from_file_location("blitline_job", ROOT / "scripts" / "blitline_job.py")
if SPEC is None or SPEC.loader is None:
    raise RuntimeError("Unable to load blitline_job module for tests")
blitline_job = importlib.util.module_from_spec(SPEC)
sys.modules["blitline_job"] = blitline_job
SPEC.loader.exec_module(blitline_job)

from blitline_image import (
    ContrastStretchChannel,
    InvalidArgument,
    JobRequest,
    NoOp,
    ResizeToFit,
    S3Location,
    build_job,
    build_payload,
    function_from_dict,
    job_payload,
)
from blitline_image.core.utils import resolve_application_id


class TestJobRequest(unittest.TestCase):
    def test_payload_shape_for_s3_source(self) -> None:
        job = build_job(
            application_id="app-123",
            src="s3://source-bucket/in/photo.jpg",
            functions=[ContrastStretchChannel(10).white_point(200).save("stretched")],
            postback_url="https://example.com/hook",
        )
        self.assertEqual(job.src, S3Location("source-bucket", "in/photo.jpg"))
        self.assertEqual(
            job_payload(job),
            {
                "application_id": "app-123",
                "src": {"name": "s3", "bucket": "source-bucket", "key": "in/photo.jpg"},
                "functions": [
                    {
                        "name": "contrast_stretch_channel",
                        "params": {"black_point": 10, "white_point": 200},
                        "save": {"image_identifier": "stretched"},
                    }
                ],
                "postback_url": "https://example.com/hook",
            },
        )

    def test_http_source_passes_through(self) -> None:
        payload = build_payload(
            application_id="app-123",
            src="https://example.com/a.png",
            functions=[NoOp()],
        )
        self.assertEqual(payload["src"], "https://example.com/a.png")
        self.assertNotIn("postback_url", payload)

    def test_invalid_jobs_rejected(self) -> None:
        with self.assertRaises(InvalidArgument):
            build_job(application_id="app", src="ftp://example.com/a.png", functions=[NoOp()])
        with self.assertRaises(InvalidArgument):
            build_job(application_id="app", src="https://example.com/a.png", functions=[])
        with self.assertRaises(InvalidArgument):
            JobRequest(application_id="", src="https://example.com/a.png", functions=[NoOp()])
        with self.assertRaises(InvalidArgument):
            JobRequest(application_id="app", src="https://example.com/a.png", functions=["crop"])
        with self.assertRaises(InvalidArgument):
            JobRequest(
                application_id="app",
                src="https://example.com/a.png",
                functions=[NoOp()],
                postback_url="not a url",
            )

    def test_urls_with_trailing_newline_rejected(self) -> None:
        with self.assertRaises(InvalidArgument):
            JobRequest(application_id="app", src="https://example.com/a.png\n", functions=[NoOp()])
        with self.assertRaises(InvalidArgument):
            build_job(
                application_id="app",
                src="https://example.com/a.png",
                functions=[NoOp()],
                postback_url="https://example.com/hook\n",
            )

    def test_job_request_is_unhashable_but_comparable(self) -> None:
        job = JobRequest(application_id="app", src="https://example.com/a.png", functions=[NoOp()])
        self.assertEqual(job, JobRequest(application_id="app", src="https://example.com/a.png", functions=(NoOp(),)))
        with self.assertRaises(TypeError):
            hash(job)

    def test_functions_copied_to_tuple(self) -> None:
        functions = [NoOp()]
        job = JobRequest(application_id="app", src="https://example.com/a.png", functions=functions)
        functions.append(NoOp())
        self.assertEqual(len(job.functions), 1)

    def test_function_from_dict_rebuilds_tree(self) -> None:
        original = ResizeToFit(width=64).save(
            "thumb", S3Location("out-bucket", "t.jpg").with_cache_forever_header()
        ).then(NoOp().save("copy"))
        rebuilt = function_from_dict(json.loads(json.dumps(original.to_dict())))
        self.assertEqual(rebuilt, original)
        self.assertEqual(rebuilt.to_dict(), original.to_dict())

    def test_function_from_dict_validates(self) -> None:
        with self.assertRaises(InvalidArgument):
            function_from_dict({"params": {}})
        with self.assertRaises(InvalidArgument):
            function_from_dict({"name": "contrast_stretch_channel", "params": {"black_point": -5}})
        malformed = [
            {"name": 5},
            {"name": None},
            ["no_op"],
            {"name": "no_op", "params": [1, 2]},
            {"name": "no_op", "save": "thumb"},
            {"name": "no_op", "save": {"image_identifier": "t", "s3_destination": "s3://bucket/key"}},
            {"name": "no_op", "save": {"image_identifier": "t", "s3_destination": {"bucket": "out-bucket", "key": "k", "headers": ["x"]}}},
            {"name": "no_op", "functions": "blur"},
            {"name": "no_op", "functions": [{"name": "blur", "params": "sigma=1"}]},
        ]
        for payload in malformed:
            with self.assertRaises(InvalidArgument, msg=repr(payload)):
                function_from_dict(payload)


class TestConfiguration(unittest.TestCase):
    def test_application_id_from_environment(self) -> None:
        with mock.patch.dict(os.environ, {"BLITLINE_APPLICATION_ID": "env-app"}):
            self.assertEqual(resolve_application_id(), "env-app")
            self.assertEqual(resolve_application_id("explicit"), "explicit")

    def test_missing_application_id(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(InvalidArgument):
                resolve_application_id()


class TestCommandLine(unittest.TestCase):
    def test_parse_function_spec_coerces_values(self) -> None:
        name, params = blitline_job._parse_function_spec(
            "resize_to_fit:width=640, only_shrink_larger=true"
        )
        self.assertEqual(name, "resize_to_fit")
        self.assertEqual(params, {"width": 640, "only_shrink_larger": True})
        self.assertEqual(blitline_job._parse_function_spec("no_op"), ("no_op", {}))
        self.assertEqual(blitline_job._parse_function_spec("blur:sigma=1.5")[1], {"sigma": 1.5})

    def test_parse_function_spec_rejects_malformed(self) -> None:
        with self.assertRaises(InvalidArgument):
            blitline_job._parse_function_spec("crop:x")
        with self.assertRaises(InvalidArgument):
            blitline_job._parse_function_spec(":x=1")

    def test_build_functions_attaches_saves(self) -> None:
        functions = blitline_job._build_functions(
            ["contrast_stretch_channel:black_point=10,white_point=20", "no_op"],
            ["stretched=s3://out-bucket/a.jpg"],
            cache_forever=True,
        )
        self.assertEqual(len(functions), 2)
        destination = functions[0].save_target.s3_destination
        self.assertEqual(destination, S3Location("out-bucket", "a.jpg"))
        self.assertEqual(dict(destination.headers), {"Cache-Control": "public, max-age=31536000"})
        self.assertIsNone(functions[1].save_target)
        with self.assertRaises(InvalidArgument):
            blitline_job._build_functions(["no_op"], ["a", "b"])

    def test_main_prints_payload(self) -> None:
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            code = blitline_job.main(
                [
                    "--src",
                    "s3://source-bucket/in.jpg",
                    "--function",
                    "contrast_stretch_channel:black_point=10,white_point=20",
                    "--application-id",
                    "app-1",
                ]
            )
        self.assertEqual(code, 0)
        payload = json.loads(stdout.getvalue())
        self.assertEqual(payload["functions"][0]["params"], {"black_point": 10, "white_point": 20})
        self.assertEqual(payload["src"]["bucket"], "source-bucket")

    def test_main_reports_invalid_job(self) -> None:
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            code = blitline_job.main(
                [
                    "--src",
                    "s3://source-bucket/in.jpg",
                    "--function",
                    "contrast_stretch_channel:black_point=10,white_point=5",
                    "--application-id",
                    "app-1",
                ]
            )
        self.assertEqual(code, 2)
        self.assertIn("Invalid job:", stderr.getvalue())

    def test_main_writes_out_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with mock.patch.dict(os.environ, {"BLITLINE_OUTPUTS": tmpdir}):
                with contextlib.redirect_stdout(io.StringIO()):
                    code = blitline_job.main(
                        [
                            "--src",
                            "https://example.com/a.png",
                            "--function",
                            "rotate:amount=90",
                            "--application-id",
                            "app-1",
                            "--out",
                            "jobs/job.json",
                        ]
                    )
            self.assertEqual(code, 0)
            written = pathlib.Path(tmpdir) / "jobs" / "job.json"
            payload = json.loads(written.read_text(encoding="utf-8"))
            self.assertEqual(payload["functions"], [{"name": "rotate", "params": {"amount": 90}}])


if __name__ == "__main__":
    unittest.main()
