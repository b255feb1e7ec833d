"""Built-in sample post used when no post is supplied."""

DEFAULT_POST_TEXT = """We're Hiring: Senior Machine Learning Engineer (LLMs & Infrastructure)

Hi everyone! At WillDom, we're looking for a Senior ML Engineer to help us build smart, scalable NLP solutions using the latest deep learning and MLOps tools.

USD pay | Contractor role | 100% Remote (Latam) | Cutting-edge AI

What you'll do:
Build real-time NLP agents with BERT, SmallBERT, and Hugging Face TGI.
Deploy and manage models at scale on Azure AKS (GPU support) using Kubernetes & Helm.
Develop high-performance APIs with FastAPI.
Automate workflows with CI/CD pipelines (Azure DevOps).

What we're looking for:
React, Next.js, Typescript, Tailwind CSS,
Nest, Node, Jest,
5+ years in ML or software engineering.
Strong Python skills (3.x).
Experience with ML infrastructure, deployment, and cloud GPUs (Azure preferred).
Bonus: knowledge of C++, C#, or Rust."""
