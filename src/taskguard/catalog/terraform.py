# catalog/terraform.py
from __future__ import annotations

from typing import List

from ..dsl import category, sh, target
from ..model import Target

TERRAFORM_DIR = "${SERVICE}/terraform"
TFCLOUD_DIR = "${SERVICE}/${ENV}"

TFLINT_RULES = [
    "terraform_deprecated_interpolation",
    "terraform_deprecated_index",
    "terraform_unused_declarations",
    "terraform_comment_syntax",
    "terraform_documented_outputs",
    "terraform_documented_variables",
    "terraform_typed_variables",
    "terraform_naming_convention",
    "terraform_required_version",
    "terraform_required_providers",
    "terraform_unused_required_providers",
    "terraform_standard_module_structure",
]

INIT = "terraform init -upgrade -reconfigure -backend-config=backend-vars/${ENV}.tfvars"
VAR_FILE = "-var-file=tfvars/${ENV}.tfvars"


def terraform_targets() -> List[Target]:
    guard = ["SERVICE", "ENV"]
    return category(
        "Terraform",
        target(
            "terraform-init",
            sh(INIT),
            guard=guard,
            cwd=TERRAFORM_DIR,
            help="Init infrastructure (SERVICE=xxx ENV=xxx)",
        ),
        target(
            "terraform-plan",
            sh(INIT),
            sh(f"terraform plan {VAR_FILE}"),
            guard=guard,
            cwd=TERRAFORM_DIR,
            help="Plan infrastructure (SERVICE=xxx ENV=xxx)",
        ),
        target(
            "terraform-apply",
            sh(INIT),
            sh(f"terraform apply {VAR_FILE}"),
            guard=guard,
            cwd=TERRAFORM_DIR,
            help="Builds or changes infrastructure (SERVICE=xxx ENV=xxx)",
        ),
        target(
            "terraform-destroy",
            sh(INIT),
            sh(f"terraform destroy -lock-timeout=60s {VAR_FILE}"),
            guard=guard,
            cwd=TERRAFORM_DIR,
            help="Destroy infrastructure (SERVICE=xxx ENV=xxx)",
        ),
        target(
            "terraform-tflint",
            sh("tflint " + " ".join(f"--enable-rule={r}" for r in TFLINT_RULES)),
            guard=["SERVICE"],
            cwd=TERRAFORM_DIR,
            help="Lint Terraform files (SERVICE=xxx)",
        ),
        target(
            "terraform-tfsec",
            sh("tfsec"),
            guard=["SERVICE"],
            cwd=TERRAFORM_DIR,
            help="Scan Terraform files (SERVICE=xxx)",
        ),
        target(
            "tfcloud-validate",
            sh("rm -fr .terraform"),
            sh("terraform init"),
            sh("terraform validate"),
            guard=guard,
            cwd=TFCLOUD_DIR,
            help="Validate infrastructure using Terraform Cloud (SERVICE=xxx ENV=xxx)",
        ),
        target(
            "tfcloud-init",
            sh("terraform init"),
            guard=guard,
            cwd=TFCLOUD_DIR,
            help="Init infrastructure using Terraform Cloud (SERVICE=xxx ENV=xxx)",
        ),
        target(
            "tfcloud-plan",
            sh("terraform init"),
            sh("terraform plan"),
            guard=guard,
            cwd=TFCLOUD_DIR,
            help="Plan infrastructure using Terraform Cloud (SERVICE=xxx ENV=xxx)",
        ),
        target(
            "tfcloud-apply",
            sh("terraform init"),
            sh("terraform apply"),
            guard=guard,
            cwd=TFCLOUD_DIR,
            help="Apply infrastructure using Terraform Cloud (SERVICE=xxx ENV=xxx)",
        ),
    )
