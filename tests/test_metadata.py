import unittest

from src.cloner.metadata import ObjectIdentity, project_metadata


SOURCE_METADATA = {
    "name": "web",
    "namespace": "default",
    "deletionGracePeriodSeconds": 30,
    "labels": {"app": "web"},
    "annotations": {"owner": "team-a"},
    "resourceVersion": "12345",
    "uid": "6f1c2f0e-aaaa-bbbb-cccc-1234567890ab",
    "creationTimestamp": "2016-01-01T00:00:00Z",
    "selfLink": "/api/v1/namespaces/default/services/web",
    "ownerReferences": [{"kind": "Deployment", "name": "web"}],
}


class MetadataProjectorTests(unittest.TestCase):
    def test_only_identity_fields_are_projected(self) -> None:
        identity = project_metadata(SOURCE_METADATA)
        self.assertEqual(
            identity,
            ObjectIdentity(
                name="web",
                namespace="default",
                deletion_grace_period_seconds=30,
                labels={"app": "web"},
                annotations={"owner": "team-a"},
            ),
        )
        self.assertEqual(
            set(identity.to_metadata()),
            {"name", "namespace", "deletionGracePeriodSeconds", "labels", "annotations"},
        )

    def test_cluster_assigned_fields_never_reach_wire_metadata(self) -> None:
        metadata = project_metadata(SOURCE_METADATA).to_metadata()
        for key in ("resourceVersion", "uid", "creationTimestamp", "selfLink", "ownerReferences"):
            self.assertNotIn(key, metadata)

    def test_empty_optional_fields_are_omitted(self) -> None:
        metadata = project_metadata({"name": "bare", "namespace": "ns"}).to_metadata()
        self.assertEqual(metadata, {"name": "bare", "namespace": "ns"})

    def test_projection_copies_label_maps(self) -> None:
        source = {"name": "web", "namespace": "default", "labels": {"app": "web"}}
        identity = project_metadata(source)
        identity.labels["tier"] = "frontend"
        self.assertEqual(source["labels"], {"app": "web"})

    def test_missing_metadata_yields_empty_identity(self) -> None:
        identity = project_metadata(None)
        self.assertEqual(identity.name, "")
        self.assertIsNone(identity.deletion_grace_period_seconds)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
