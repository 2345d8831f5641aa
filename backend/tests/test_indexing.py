"""
Indexing pipeline tests: label fan-out, document shape and per-record failure isolation.
"""
import threading
from unittest.mock import Mock

from photofind.pipeline.indexing import IndexingPipeline
from photofind.services.blob_s3 import S3Blob
from photofind.services.config import AwsConfig, BlobConfig

from conftest import FakeBlob, FakeSearch, FakeVision, s3_record


class TestIndexEvent:
    def test_given_upload_with_custom_and_vision_labels_when_indexing_then_writes_canonical_document(self):
        # Given
        vision = FakeVision(labels={"img one.jpg": ["Dog", "Person"]})
        blob = FakeBlob(metadata={"img one.jpg": "Sam, Family Vacation"})
        search = FakeSearch()
        pipeline = IndexingPipeline(vision=vision, blob=blob, search=search)

        # When
        report = pipeline.run([s3_record(bucket="photos", key="img%20one.jpg")])

        # Then
        assert report.indexed == 1 and report.failed == 0
        assert search.indexed == [{
            "objectKey": "img one.jpg",
            "bucket": "photos",
            "createdTimestamp": "2025-11-20T10:00:00.000Z",
            "labels": ["dog", "family vacation", "person", "sam"],
        }]

    def test_given_encoded_key_when_indexing_then_collaborators_see_decoded_key(self):
        vision, blob, search = FakeVision(), FakeBlob(), FakeSearch()
        pipeline = IndexingPipeline(vision=vision, blob=blob, search=search)

        pipeline.run([s3_record(key="trips/beach+day%281%29.jpg")])

        assert vision.calls == [("photos", "trips/beach day(1).jpg")]
        assert blob.calls == [("photos", "trips/beach day(1).jpg")]

    def test_given_no_labels_from_either_source_when_indexing_then_writes_empty_label_list(self):
        search = FakeSearch()
        pipeline = IndexingPipeline(vision=FakeVision(), blob=FakeBlob(), search=search)

        report = pipeline.run([s3_record(key="blank.jpg")])

        assert report.indexed == 1
        assert search.indexed[0]["labels"] == []


class TestLabelFanOut:
    def test_given_both_label_sources_when_fetching_then_calls_are_in_flight_together(self):
        # Each source blocks until the other has started; a sequential fetch breaks the barrier
        barrier = threading.Barrier(2, timeout=5)

        class WaitingVision(FakeVision):
            def detect_labels(self, bucket, key):
                barrier.wait()
                return ["Dog"]

        class WaitingBlob(FakeBlob):
            def custom_labels(self, bucket, key):
                barrier.wait()
                return "Sam"

        pipeline = IndexingPipeline(vision=WaitingVision(), blob=WaitingBlob(), search=FakeSearch())

        assert pipeline.fetch_labels("photos", "img.jpg") == ("dog", "sam")
        assert not barrier.broken


class TestFailureIsolation:
    def test_given_one_label_fetch_failure_when_running_batch_then_other_records_are_indexed(self):
        # Given: five events, the third fails during label fetch
        keys = [f"p{i}.jpg" for i in range(5)]
        search = FakeSearch()
        pipeline = IndexingPipeline(vision=FakeVision(fail_on=("p2.jpg",)), blob=FakeBlob(), search=search)

        # When
        report = pipeline.run([s3_record(key=k) for k in keys])

        # Then
        assert len(search.indexed) == 4
        assert "p2.jpg" not in [d["objectKey"] for d in search.indexed]
        assert report.indexed == 4 and report.failed == 1
        failed = [i for i in report.items if not i.ok][0]
        assert failed.object_key == "p2.jpg"
        assert "rekognition unavailable" in failed.error

    def test_given_write_failure_when_running_batch_then_failure_is_reported_not_raised(self):
        search = FakeSearch(fail_on=("a.jpg",))
        pipeline = IndexingPipeline(vision=FakeVision(), blob=FakeBlob(), search=search)

        report = pipeline.run([s3_record(key="a.jpg"), s3_record(key="b.jpg")])

        assert [i.ok for i in report.items] == [False, True]
        assert [d["objectKey"] for d in search.indexed] == ["b.jpg"]

    def test_given_malformed_record_when_running_batch_then_it_fails_alone(self):
        search = FakeSearch()
        pipeline = IndexingPipeline(vision=FakeVision(), blob=FakeBlob(), search=search)

        report = pipeline.run([{"eventName": "ObjectCreated:Put"}, s3_record(key="ok.jpg")])

        assert report.summary() == {"indexed": 1, "failed": 1}
        assert report.items[0].bucket is None

    def test_given_encoded_key_when_record_fails_then_report_carries_decoded_key(self):
        vision = FakeVision(fail_on=("holiday photos/img one.jpg",))
        pipeline = IndexingPipeline(vision=vision, blob=FakeBlob(), search=FakeSearch())

        report = pipeline.run([s3_record(key="holiday+photos/img%20one.jpg")])

        failed = report.items[0]
        assert not failed.ok
        assert failed.object_key == "holiday photos/img one.jpg"
        assert failed.raw_key == "holiday+photos/img%20one.jpg"

    def test_given_empty_batch_when_running_then_reports_nothing(self):
        report = IndexingPipeline(vision=FakeVision(), blob=FakeBlob(), search=FakeSearch()).run([])
        assert report.items == []

    def test_given_parallel_workers_when_running_batch_then_results_keep_input_order(self):
        keys = [f"p{i}.jpg" for i in range(8)]
        search = FakeSearch()
        pipeline = IndexingPipeline(
            vision=FakeVision(fail_on=("p5.jpg",)), blob=FakeBlob(), search=search, max_workers=4
        )

        report = pipeline.run([s3_record(key=k) for k in keys])

        assert [i.object_key for i in report.items] == keys
        assert report.failed == 1
        assert len(search.indexed) == 7


class TestS3CustomLabels:
    def _blob(self, metadata):
        s3 = Mock()
        s3.head_object.return_value = {"Metadata": metadata}
        return S3Blob(BlobConfig(custom_labels_key="customLabels"), AwsConfig(), s3=s3), s3

    def test_given_lowercased_metadata_key_when_reading_then_finds_labels(self):
        blob, s3 = self._blob({"customlabels": "Sam, Family Vacation"})

        assert blob.custom_labels("photos", "img one.jpg") == "Sam, Family Vacation"
        s3.head_object.assert_called_once_with(Bucket="photos", Key="img one.jpg")

    def test_given_mixed_case_metadata_key_when_reading_then_matches_case_insensitively(self):
        blob, _ = self._blob({"CustomLabels": "beach"})
        assert blob.custom_labels("photos", "k.jpg") == "beach"

    def test_given_no_metadata_when_reading_then_returns_none(self):
        blob, _ = self._blob({})
        assert blob.custom_labels("photos", "k.jpg") is None

    def test_given_labels_when_uploading_then_stores_them_as_metadata(self):
        s3 = Mock()
        blob = S3Blob(BlobConfig(bucket="photos", custom_labels_key="customLabels"), AwsConfig(), s3=s3)

        stored = blob.put_photo("cat.jpg", b"\xff\xd8", "image/jpeg", "Sam, Cat")

        assert stored == {"bucket": "photos", "key": "cat.jpg"}
        s3.put_object.assert_called_once_with(
            Bucket="photos",
            Key="cat.jpg",
            Body=b"\xff\xd8",
            ContentType="image/jpeg",
            Metadata={"customLabels": "Sam, Cat"},
        )
